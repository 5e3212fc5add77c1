"""Packaged business applications: CRM, HR, ETL and reporting."""

from enum import Enum
from typing import Any, Dict, Mapping, Optional

from synergy_bridge.tools.base import EnterpriseTool
from synergy_bridge.tools.options import flag, integer, is_blank, parse_option, text


class ViewMode(Enum):
    SALES_REP = "SALES_REP"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"
    ALL_ACROSS_ORGANIZATIONS = "ALL_ACROSS_ORGANIZATIONS"


class MethodName(Enum):
    GET = "GET"
    FIND = "FIND"
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    CANCEL = "CANCEL"
    APPROVE = "APPROVE"
    DENY = "DENY"
    ESCALATE = "ESCALATE"


class RecoveryStrategy(Enum):
    RESTART = "RESTART"
    RESUME = "RESUME"
    START_FROM_SCRATCH = "START_FROM_SCRATCH"
    BLAME_DBA = "BLAME_DBA"


class PushdownOptimization(Enum):
    NONE = "NONE"
    PARTIAL = "PARTIAL"
    FULL = "FULL"
    AGGRESSIVE = "AGGRESSIVE"


class OutputFormat(Enum):
    PDF = "PDF"
    RTF = "RTF"
    XLS = "XLS"
    DOC = "DOC"
    RPT = "RPT"
    PRINTER_LPT1 = "PRINTER_LPT1"
    FAX = "FAX"


class PageOrientation(Enum):
    PORTRAIT = "PORTRAIT"
    LANDSCAPE = "LANDSCAPE"
    CONFUSED = "CONFUSED"


VALID_METHODS = ", ".join(method.value for method in MethodName)


class SiebelCrmTool(EnterpriseTool):
    """Customer 360 lookup. Mostly nulls, plus a pointer to Karen's spreadsheet."""

    name = "siebel-crm-customer-lookup"
    description = (
        "Query Siebel CRM for complete customer 360-degree view with integration "
        "object hierarchy. Returns a customer record with 47 null fields."
    )
    required = ("searchSpec", "businessComponent")
    required_hints = {
        "searchSpec": "Please specify a Siebel search expression.",
        "businessComponent": (
            "Please specify the business component name (e.g., Account, Contact, Opportunity)."
        ),
    }
    integer_params = ("maxRecords",)
    parameters = {
        "searchSpec": "Siebel search expression",
        "businessComponent": "Business component name (Account, Contact, Opportunity)",
        "integrationObject": "Integration object name",
        "viewMode": "SALES_REP, MANAGER, ADMIN or ALL_ACROSS_ORGANIZATIONS",
        "includeChildObjects": "Include child business components",
        "maxRecords": "Maximum records to return",
        "sortSpec": "Sort specification",
        "languageCode": "Language code (ENU, DEU, JPN)",
    }
    interrupted_message = (
        "Customer lookup interrupted. Siebel session may have timed out. "
        "Please log in again through the Siebel web client (requires IE 8 or higher)."
    )

    def context(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "search_spec": text(params, "searchSpec"),
            "business_component": text(params, "businessComponent"),
            "view_mode": parse_option(ViewMode, params.get("viewMode"), ViewMode.SALES_REP),
            "integration_object": text(params, "integrationObject"),
            "include_children": flag(params, "includeChildObjects"),
            "max_records": integer(params, "maxRecords"),
            "sort_spec": text(params, "sortSpec"),
            "language": text(params, "languageCode"),
            "customer": self.responses.siebel_customer(),
        }


class PeopleSoftTool(EnterpriseTool):
    """Call a Component Interface. Changes land in 2-3 pay periods."""

    name = "peoplesoft-component-interface-call"
    description = (
        "Invoke PeopleSoft Component Interface for HR/Finance integration with "
        "effective dating support."
    )
    required = ("componentInterfaceName", "methodName")
    required_hints = {
        "componentInterfaceName": "Please specify the Component Interface name.",
        "methodName": (
            "Please specify the method "
            "(GET, FIND, CREATE, UPDATE, CANCEL, APPROVE, DENY, or ESCALATE)."
        ),
    }
    parameters = {
        "componentInterfaceName": "Component Interface name",
        "methodName": "GET, FIND, CREATE, UPDATE, CANCEL, APPROVE, DENY or ESCALATE",
        "getKeys": "Get method key values as JSON",
        "findKeys": "Find method search keys as JSON",
        "propertyValues": "Property values to set as JSON",
        "effectiveDate": "Effective date in ISO format (YYYY-MM-DD)",
        "setLanguageCode": "Language code",
        "interactiveMode": "Interactive mode flag",
    }
    interrupted_message = (
        "Component Interface call interrupted. PeopleTools session may have expired. "
        "Please log in again through the PeopleSoft portal (requires Firefox or IE 11)."
    )

    @staticmethod
    def _method(params: Mapping[str, Any]) -> Optional[MethodName]:
        try:
            return MethodName[str(params.get("methodName")).strip().upper()]
        except KeyError:
            return None

    def validate(self, params: Mapping[str, Any]) -> Optional[str]:
        if self._method(params) is None:
            return (
                f"ERROR: Invalid methodName '{params.get('methodName')}'. "
                f"Valid methods are: {VALID_METHODS}."
            )
        return None

    def context(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "transaction_id": self.responses.generate_peoplesoft_transaction_id(),
            "component_interface": text(params, "componentInterfaceName"),
            "method": self._method(params),
            "effective_date": text(params, "effectiveDate"),
            "language": text(params, "setLanguageCode"),
            "interactive": flag(params, "interactiveMode"),
            "has_get_keys": not is_blank(params.get("getKeys")),
            "has_find_keys": not is_blank(params.get("findKeys")),
            "has_property_values": not is_blank(params.get("propertyValues")),
        }


class InformaticaEtlTool(EnterpriseTool):
    """Start a PowerCenter workflow, which then waits for a license."""

    name = "informatica-etl-workflow-start"
    description = (
        "Trigger Informatica PowerCenter workflow with session parameter overrides "
        "and optional pushdown optimization."
    )
    required = ("folderName", "workflowName")
    required_hints = {
        "folderName": "Please specify the repository folder name.",
        "workflowName": "Please specify the workflow name.",
    }
    parameters = {
        "folderName": "Repository folder name",
        "workflowName": "Workflow name",
        "parameterFile": "Parameter file path",
        "sessionOverrides": "Session parameter overrides as JSON",
        "recoveryStrategy": "RESTART, RESUME, START_FROM_SCRATCH or BLAME_DBA",
        "waitForCompletion": "Wait for workflow completion",
        "osProfile": "OS profile name",
        "pushdownOptimization": "NONE, PARTIAL, FULL or AGGRESSIVE",
    }
    interrupted_message = (
        "Workflow trigger interrupted. Repository connection may have timed out. "
        "Please restart the Repository Server and wait 10-15 minutes for re-initialization."
    )

    def context(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "run_id": self.responses.generate_workflow_run_id(),
            "folder": text(params, "folderName"),
            "workflow": text(params, "workflowName"),
            "recovery": parse_option(
                RecoveryStrategy, params.get("recoveryStrategy"), RecoveryStrategy.RESTART
            ),
            "pushdown": parse_option(
                PushdownOptimization,
                params.get("pushdownOptimization"),
                PushdownOptimization.NONE,
            ),
            "parameter_file": text(params, "parameterFile"),
            "has_session_overrides": not is_blank(params.get("sessionOverrides")),
            "os_profile": text(params, "osProfile"),
            "wait_for_completion": flag(params, "waitForCompletion"),
        }


class CrystalReportsTool(EnterpriseTool):
    """Queue a Crystal Reports job behind last Tuesday's requests."""

    name = "crystal-reports-generate"
    description = (
        "Generate a Crystal Reports document from an .rpt template with ODBC data "
        "source, subreports and output to PDF, printer or fax."
    )
    required = ("reportTemplatePath",)
    required_hints = {
        "reportTemplatePath": "Please specify the path to the .rpt template file.",
    }
    parameters = {
        "reportTemplatePath": "Path to the .rpt template file",
        "outputFormat": "PDF, RTF, XLS, DOC, RPT, PRINTER_LPT1 or FAX",
        "dataSourceOdbc": "ODBC connection string for data source",
        "parameterValues": "Report parameter values as JSON",
        "subreportLinks": "Subreport linking configuration as JSON array",
        "pageOrientation": "PORTRAIT, LANDSCAPE or CONFUSED",
        "watermarkText": "Watermark text overlay",
        "emailOnCompletion": "Lotus Notes email address for completion notification",
    }
    interrupted_message = (
        "Report generation interrupted. Crystal Reports engine may be unstable. "
        "Please restart the report server and wait 15 minutes for re-initialization."
    )

    def validate(self, params: Mapping[str, Any]) -> Optional[str]:
        path = text(params, "reportTemplatePath") or ""
        if not path.lower().endswith(".rpt"):
            return (
                "ERROR: reportTemplatePath must end with .rpt extension. Crystal Reports "
                "refuses to acknowledge any other file format. Please rename your file or "
                "submit a change request to the Architecture Review Board for format "
                "exception approval (estimated: 6-8 weeks)."
            )
        return None

    def context(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "job_id": self.responses.generate_report_job_id(),
            "template_path": text(params, "reportTemplatePath"),
            "output_format": parse_option(
                OutputFormat, params.get("outputFormat"), OutputFormat.PDF
            ),
            "orientation": parse_option(
                PageOrientation, params.get("pageOrientation"), PageOrientation.PORTRAIT
            ),
            "data_source": text(params, "dataSourceOdbc"),
            "has_parameters": not is_blank(params.get("parameterValues")),
            "has_subreports": not is_blank(params.get("subreportLinks")),
            "watermark": text(params, "watermarkText"),
            "email": text(params, "emailOnCompletion"),
        }
