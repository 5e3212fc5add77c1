"""The twelve enterprise operations."""

from synergy_bridge.tools.appserver import SoaGovernanceTool, WebSphereDeployTool
from synergy_bridge.tools.base import EnterpriseTool
from synergy_bridge.tools.business_apps import (
    CrystalReportsTool,
    InformaticaEtlTool,
    PeopleSoftTool,
    SiebelCrmTool,
)
from synergy_bridge.tools.directory import LdapSyncTool
from synergy_bridge.tools.mainframe import CobolCopybookTool, MainframeJclTool
from synergy_bridge.tools.middleware import (
    EsbRouteTool,
    TibcoPublishTool,
    TuxedoTransactionTool,
)

ALL_TOOLS = (
    WebSphereDeployTool,
    CobolCopybookTool,
    MainframeJclTool,
    SoaGovernanceTool,
    EsbRouteTool,
    LdapSyncTool,
    CrystalReportsTool,
    TuxedoTransactionTool,
    TibcoPublishTool,
    SiebelCrmTool,
    InformaticaEtlTool,
    PeopleSoftTool,
)

__all__ = ["ALL_TOOLS", "EnterpriseTool"] + [tool.__name__ for tool in ALL_TOOLS]
