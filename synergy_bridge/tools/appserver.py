"""Application server operations: EJB deployment and SOA governance."""

from enum import Enum
from typing import Any, Dict, Mapping

from synergy_bridge.tools.base import EnterpriseTool
from synergy_bridge.tools.options import flag, integer, parse_option, text


class JndiBindingStrategy(Enum):
    LEGACY_COMPAT = "LEGACY_COMPAT"
    MODERN_LEGACY = "MODERN_LEGACY"
    ULTRA_LEGACY = "ULTRA_LEGACY"


class TransactionIsolationLevel(Enum):
    READ_UNCOMMITTED = "READ_UNCOMMITTED"
    READ_COMMITTED = "READ_COMMITTED"
    REPEATABLE_READ = "REPEATABLE_READ"
    SERIALIZABLE = "SERIALIZABLE"
    CHAOS = "CHAOS"


class XmlDescriptorValidationMode(Enum):
    STRICT = "STRICT"
    LAX = "LAX"
    YOLO = "YOLO"


class GovernancePolicySet(Enum):
    ENTERPRISE_2008 = "ENTERPRISE_2008"
    ENTERPRISE_2012 = "ENTERPRISE_2012"
    ENTERPRISE_LEGACY_COMPAT = "ENTERPRISE_LEGACY_COMPAT"
    ALL_OF_THEM = "ALL_OF_THEM"


class WsPolicyAttachmentMode(Enum):
    INLINE = "INLINE"
    EXTERNAL = "EXTERNAL"
    MAGIC = "MAGIC"


class WebSphereDeployTool(EnterpriseTool):
    """Deploy an EAR to a WebSphere cluster, J2EE 1.4 style."""

    name = "websphere-deploy-ejb"
    description = (
        "Deploy an Enterprise JavaBean to the WebSphere Application Server cluster "
        "with full J2EE 1.4 compliance."
    )
    required = ("earFilePath", "clusterName")
    required_hints = {
        "earFilePath": "Please specify the path to your EAR file.",
        "clusterName": "Please specify the target cluster.",
    }
    integer_params = ("connectionPoolMinSize", "connectionPoolMaxSize")
    parameters = {
        "earFilePath": "Path to the EAR file to deploy",
        "clusterName": "Target cluster name for deployment",
        "jndiBindingStrategy": "LEGACY_COMPAT, MODERN_LEGACY or ULTRA_LEGACY",
        "transactionIsolationLevel": (
            "READ_UNCOMMITTED, READ_COMMITTED, REPEATABLE_READ, SERIALIZABLE or CHAOS"
        ),
        "enableWorkloadManagement": "Enable Workload Management (requires separate license)",
        "sessionAffinityMode": "Session affinity mode configuration",
        "connectionPoolMinSize": "Connection pool minimum size (1-10000)",
        "connectionPoolMaxSize": "Connection pool maximum size (1-10000)",
        "xmlDescriptorValidationMode": "STRICT, LAX or YOLO",
    }
    interrupted_message = (
        "Deployment interrupted. The application server may be in an inconsistent state. "
        "Please restart the cluster and try again (estimated downtime: 4 hours)."
    )

    def context(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "ear_file": text(params, "earFilePath"),
            "cluster": text(params, "clusterName"),
            "binding": parse_option(
                JndiBindingStrategy,
                params.get("jndiBindingStrategy"),
                JndiBindingStrategy.LEGACY_COMPAT,
            ),
            "isolation": parse_option(
                TransactionIsolationLevel,
                params.get("transactionIsolationLevel"),
                TransactionIsolationLevel.READ_COMMITTED,
            ),
            "validation": parse_option(
                XmlDescriptorValidationMode,
                params.get("xmlDescriptorValidationMode"),
                XmlDescriptorValidationMode.STRICT,
            ),
            "workload_management": flag(params, "enableWorkloadManagement"),
            "session_affinity": text(params, "sessionAffinityMode"),
            "pool_min": integer(params, "connectionPoolMinSize"),
            "pool_max": integer(params, "connectionPoolMaxSize"),
        }


class SoaGovernanceTool(EnterpriseTool):
    """Validate a WSDL against every governance policy ever written."""

    name = "soa-governance-validate"
    description = (
        "Validate a SOAP service against enterprise SOA governance policies. "
        "Always technically compliant, never spiritually so."
    )
    required = ("wsdlEndpoint",)
    required_hints = {
        "wsdlEndpoint": "Please provide the WSDL URL or path.\n"
        "Note: If your service doesn't have a WSDL, it's not really a service.",
    }
    integer_params = ("mtomThresholdBytes",)
    parameters = {
        "wsdlEndpoint": "WSDL URL or file path",
        "governancePolicySet": (
            "ENTERPRISE_2008, ENTERPRISE_2012, ENTERPRISE_LEGACY_COMPAT or ALL_OF_THEM"
        ),
        "wsSecurityProfile": "WS-Security profile name",
        "wsPolicyAttachmentMode": "INLINE, EXTERNAL or MAGIC",
        "mtomThresholdBytes": "MTOM optimization threshold in bytes",
        "validateWsAddressing": "Validate WS-Addressing headers",
        "validateWsReliableMessaging": "Validate WS-ReliableMessaging sequences",
        "validateWsAtomicTransaction": "Validate WS-AtomicTransaction coordination",
        "customSchematronRules": "Additional Schematron validation rules",
    }
    interrupted_message = (
        "Governance validation interrupted.\n"
        "The Architecture Review Board will need to reconvene."
    )

    def context(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "wsdl_endpoint": text(params, "wsdlEndpoint"),
            "policy_set": parse_option(
                GovernancePolicySet,
                params.get("governancePolicySet"),
                GovernancePolicySet.ENTERPRISE_2008,
            ),
            "attachment_mode": parse_option(
                WsPolicyAttachmentMode,
                params.get("wsPolicyAttachmentMode"),
                WsPolicyAttachmentMode.INLINE,
            ),
            "security_profile": text(params, "wsSecurityProfile"),
            "mtom_threshold": integer(params, "mtomThresholdBytes"),
            "ws_addressing": flag(params, "validateWsAddressing"),
            "ws_reliable_messaging": flag(params, "validateWsReliableMessaging"),
            "ws_atomic_transaction": flag(params, "validateWsAtomicTransaction"),
            "schematron_rules": text(params, "customSchematronRules"),
            "warnings": self.responses.governance_warnings(),
        }
