"""Tests for the twelve enterprise operation handlers."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from conftest import MINIMAL_PARAMS
from synergy_bridge.bridge import SynergyBridge
from synergy_bridge.engine.delays import REALISTIC_DELAYS, DelayTable
from synergy_bridge.engine.errors import ENTERPRISE_ERRORS, ErrorCatalog
from synergy_bridge.tools.appserver import TransactionIsolationLevel
from synergy_bridge.tools.middleware import tp_flag_warnings
from synergy_bridge.tools.options import InvalidParameter, flag, integer, parse_option

TOOL_NAMES = sorted(REALISTIC_DELAYS)

REPORT_HEADERS = {
    "websphere-deploy-ejb": "=== WebSphere Application Server Deployment Report ===",
    "cobol-copybook-transform": "=== COBOL Copybook Transformation Report ===",
    "mainframe-jcl-submit": "=== Mainframe Job Submission Report ===",
    "soa-governance-validate": "=== SOA Governance Validation Report ===",
    "enterprise-service-bus-route": "=== Enterprise Service Bus Route Configuration Report ===",
    "ldap-corporate-directory-sync": "=== LDAP Corporate Directory Synchronization Report ===",
    "crystal-reports-generate": "=== Crystal Reports Generation Report ===",
    "tuxedo-transaction-begin": "=== Tuxedo Distributed Transaction Report ===",
    "tibco-rendezvous-publish": "=== TIBCO Rendezvous Message Publication Report ===",
    "siebel-crm-customer-lookup": "=== Siebel CRM Customer Lookup Report ===",
    "informatica-etl-workflow-start": "=== Informatica PowerCenter Workflow Report ===",
    "peoplesoft-component-interface-call": "=== PeopleSoft Component Interface Report ===",
}

REQUIRED_PARAMS = [
    (tool_name, param)
    for tool_name in TOOL_NAMES
    for param in sorted(MINIMAL_PARAMS[tool_name])
]

ERROR_STRINGS = {error.to_error_string() for error in ENTERPRISE_ERRORS}


def run(bridge, tool_name, params):
    return asyncio.run(bridge.invoke(tool_name, params))


class TestHappyPath:
    @pytest.mark.parametrize("tool_name", TOOL_NAMES)
    def test_minimal_params_produce_report(self, bridge, minimal_params, tool_name):
        result = run(bridge, tool_name, minimal_params(tool_name))
        assert result.startswith(REPORT_HEADERS[tool_name])
        assert not result.startswith("ERROR")

    @pytest.mark.parametrize("tool_name", TOOL_NAMES)
    def test_handler_waits_its_own_delay(self, bridge, minimal_params, tool_name):
        with patch.object(bridge.delays, "apply_delay", new_callable=AsyncMock) as apply_delay:
            run(bridge, tool_name, minimal_params(tool_name))
        apply_delay.assert_awaited_once_with(tool_name)

    def test_cobol_waits_three_seconds(self, minimal_params):
        bridge = SynergyBridge(catalog=ErrorCatalog(probability=0.0))
        with patch("synergy_bridge.engine.delays.asyncio.sleep", new_callable=AsyncMock) as sleep:
            run(bridge, "cobol-copybook-transform", minimal_params("cobol-copybook-transform"))
        sleep.assert_awaited_once_with(3.0)

    def test_describe(self, bridge):
        entry = bridge.get_tool("crystal-reports-generate").describe()
        assert entry["name"] == "crystal-reports-generate"
        assert entry["delay_seconds"] == 12
        assert entry["required"] == ["reportTemplatePath"]
        assert "outputFormat" in entry["parameters"]


class TestRequiredParameters:
    @pytest.mark.parametrize("tool_name,param", REQUIRED_PARAMS)
    def test_missing_required_param(self, bridge, minimal_params, tool_name, param):
        params = minimal_params(tool_name)
        del params[param]

        with patch.object(bridge.delays, "apply_delay", new_callable=AsyncMock) as apply_delay:
            result = run(bridge, tool_name, params)

        assert result.startswith("ERROR:")
        assert param in result
        apply_delay.assert_not_awaited()

    @pytest.mark.parametrize("tool_name,param", REQUIRED_PARAMS)
    def test_whitespace_counts_as_missing(self, bridge, minimal_params, tool_name, param):
        result = run(bridge, tool_name, minimal_params(tool_name, **{param: "   "}))
        assert result.startswith(f"ERROR: {param} is required.")

    def test_no_params_at_all(self, bridge):
        result = run(bridge, "siebel-crm-customer-lookup", None)
        assert result.startswith("ERROR: searchSpec is required.")

    def test_validation_beats_error_injection(self, failing_bridge):
        result = run(failing_bridge, "crystal-reports-generate", {})
        assert result.startswith("ERROR: reportTemplatePath is required.")


class TestErrorInjection:
    @pytest.mark.parametrize("tool_name", TOOL_NAMES)
    def test_injected_error_replaces_report(self, failing_bridge, minimal_params, tool_name):
        result = run(failing_bridge, tool_name, minimal_params(tool_name))
        assert result in ERROR_STRINGS

    def test_error_injected_after_delay(self, failing_bridge, minimal_params):
        with patch.object(failing_bridge.delays, "apply_delay", new_callable=AsyncMock) as apply_delay:
            result = run(failing_bridge, "tibco-rendezvous-publish", minimal_params("tibco-rendezvous-publish"))
        apply_delay.assert_awaited_once()
        assert result.startswith("ERR_")


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancelled_call_reports_indeterminate(self, minimal_params):
        bridge = SynergyBridge(delays=DelayTable(), catalog=ErrorCatalog(probability=0.0))
        task = asyncio.ensure_future(
            bridge.invoke("cobol-copybook-transform", minimal_params("cobol-copybook-transform"))
        )
        await asyncio.sleep(0.05)
        task.cancel()

        result = await task
        assert result.startswith("ERROR:")
        assert "interrupted" in result
        assert "INDETERMINATE" in result

    @pytest.mark.asyncio
    async def test_each_tool_has_its_own_interruption_text(self, minimal_params):
        bridge = SynergyBridge(delays=DelayTable(), catalog=ErrorCatalog(probability=0.0))
        tasks = [
            asyncio.ensure_future(bridge.invoke(name, minimal_params(name)))
            for name in ("websphere-deploy-ejb", "tuxedo-transaction-begin")
        ]
        await asyncio.sleep(0.05)
        for task in tasks:
            task.cancel()

        websphere, tuxedo = [await task for task in tasks]
        assert "Deployment interrupted" in websphere
        assert "Two-phase commit state unknown" in tuxedo


class TestWebSphere:
    def test_chaos_and_yolo_notices(self, bridge, minimal_params):
        result = run(bridge, "websphere-deploy-ejb", minimal_params(
            "websphere-deploy-ejb",
            transactionIsolationLevel="chaos",
            xmlDescriptorValidationMode="YOLO",
        ))
        assert "Transaction Isolation: CHAOS" in result
        assert "CHAOS Isolation Notice" in result
        assert "YOLO Validation Notice" in result

    def test_unknown_option_uses_default(self, bridge, minimal_params):
        result = run(bridge, "websphere-deploy-ejb", minimal_params(
            "websphere-deploy-ejb", transactionIsolationLevel="EVENTUAL",
        ))
        assert "Transaction Isolation: READ_COMMITTED" in result
        assert "JNDI Binding Strategy: LEGACY_COMPAT" in result

    def test_pool_sizes_must_be_integers(self, bridge, minimal_params):
        result = run(bridge, "websphere-deploy-ejb", minimal_params(
            "websphere-deploy-ejb", connectionPoolMinSize="lots",
        ))
        assert result.startswith("ERROR: connectionPoolMinSize must be an integer")


class TestCobolCopybook:
    def test_report_contains_canned_output(self, bridge, minimal_params):
        result = run(bridge, "cobol-copybook-transform", minimal_params("cobol-copybook-transform"))
        assert "FILLER" in result
        assert "SEE_MAINFRAME_DOCUMENTATION" in result
        assert "Target Encoding: EBCDIC_037" in result

    def test_pray_strategy(self, bridge, minimal_params):
        result = run(bridge, "cobol-copybook-transform", minimal_params(
            "cobol-copybook-transform", redefinesStrategy="pray",
        ))
        assert "REDEFINES Strategy: PRAY" in result
        assert "resolved by prayer" in result


class TestMainframeJcl:
    def test_report_has_job_id_and_status(self, bridge, minimal_params):
        result = run(bridge, "mainframe-jcl-submit", minimal_params("mainframe-jcl-submit"))
        assert "Job ID: JOB" in result
        assert "Current Status:" in result
        assert "Job Class: A" in result
        assert "Priority: 8" in result

    def test_job_card_required(self, bridge, minimal_params):
        result = run(bridge, "mainframe-jcl-submit", minimal_params(
            "mainframe-jcl-submit", jclSource="EXEC PGM=IEFBR14",
        ))
        assert result.startswith("ERROR: Invalid JCL. //JOB card is required.")

    @pytest.mark.parametrize("priority", [16, -1, "99"])
    def test_priority_out_of_range(self, bridge, minimal_params, priority):
        result = run(bridge, "mainframe-jcl-submit", minimal_params(
            "mainframe-jcl-submit", priorityLevel=priority,
        ))
        assert result.startswith("ERROR: priorityLevel must be between 0 and 15.")
        assert f"Current value: {int(priority)}" in result

    @pytest.mark.parametrize("priority", [0, 15, "12"])
    def test_priority_in_range(self, bridge, minimal_params, priority):
        result = run(bridge, "mainframe-jcl-submit", minimal_params(
            "mainframe-jcl-submit", priorityLevel=priority, jobClass="batch",
        ))
        assert f"Priority: {int(priority)}" in result
        assert "Job Class: B" in result

    def test_priority_must_be_integer(self, bridge, minimal_params):
        result = run(bridge, "mainframe-jcl-submit", minimal_params(
            "mainframe-jcl-submit", priorityLevel="high",
        ))
        assert result.startswith("ERROR: priorityLevel must be an integer")

    def test_abend_attention_block(self, bridge, minimal_params):
        with patch.object(
            bridge.responses,
            "random_mainframe_status",
            return_value="ABEND S0C7 - CONTACT SYSTEMS PROGRAMMING",
        ):
            result = run(bridge, "mainframe-jcl-submit", minimal_params("mainframe-jcl-submit"))
        assert "*** ATTENTION ***" in result

    def test_no_attention_block_without_abend(self, bridge, minimal_params):
        with patch.object(bridge.responses, "random_mainframe_status", return_value="QUEUED - POSITION 847"):
            result = run(bridge, "mainframe-jcl-submit", minimal_params("mainframe-jcl-submit"))
        assert "Current Status: QUEUED - POSITION 847" in result
        assert "ATTENTION" not in result


class TestSoaGovernance:
    def test_lists_all_147_warnings(self, bridge, minimal_params):
        result = run(bridge, "soa-governance-validate", minimal_params("soa-governance-validate"))
        assert "Warnings: 147" in result
        assert "Errors: 0" in result
        assert "\n1. " in result
        assert "\n147. " in result
        assert "TECHNICALLY COMPLIANT" in result
        assert "SPIRITUALLY DEFICIENT" in result


class TestEsbRoute:
    def test_retry_policy_hidden_by_default(self, bridge, minimal_params):
        result = run(bridge, "enterprise-service-bus-route", minimal_params("enterprise-service-bus-route"))
        assert "Retry Policy:" not in result
        assert "Correlation Strategy: PRAY_IT_EXISTS" in result

    def test_retry_policy_fills_defaults(self, bridge, minimal_params):
        result = run(bridge, "enterprise-service-bus-route", minimal_params(
            "enterprise-service-bus-route", maxRetries=5,
        ))
        assert "Retry Policy:" in result
        assert "Max Retries: 5" in result
        assert "Backoff Multiplier: 2.0" in result
        assert "Max Backoff: 60 seconds" in result

    def test_backoff_multiplier_must_be_number(self, bridge, minimal_params):
        result = run(bridge, "enterprise-service-bus-route", minimal_params(
            "enterprise-service-bus-route", backoffMultiplier="fast",
        ))
        assert result.startswith("ERROR: backoffMultiplier must be a number")


class TestLdapSync:
    def test_contractors_skipped(self, bridge, minimal_params):
        result = run(bridge, "ldap-corporate-directory-sync", minimal_params("ldap-corporate-directory-sync"))
        assert "Users synced: 0" in result
        assert "Users skipped: 47,000" in result
        assert "CONTRACTOR" in result

    @pytest.mark.parametrize("page_size", [0, 1001])
    def test_page_size_out_of_range(self, bridge, minimal_params, page_size):
        result = run(bridge, "ldap-corporate-directory-sync", minimal_params(
            "ldap-corporate-directory-sync", pageSize=page_size,
        ))
        assert result.startswith("ERROR: pageSize must be between 1 and 1000.")
        assert f"Current value: {page_size}" in result

    def test_page_size_boundaries_accepted(self, bridge, minimal_params):
        for page_size in (1, 1000):
            result = run(bridge, "ldap-corporate-directory-sync", minimal_params(
                "ldap-corporate-directory-sync", pageSize=page_size,
            ))
            assert f"Page Size: {page_size}" in result

    def test_infinite_referrals(self, bridge, minimal_params):
        result = run(bridge, "ldap-corporate-directory-sync", minimal_params(
            "ldap-corporate-directory-sync", referralHandling="FOLLOW_INFINITELY",
        ))
        assert "Referrals followed: ∞" in result


class TestCrystalReports:
    @pytest.mark.parametrize("path", ["C:\\Reports\\q3.pdf", "report", "report.rpt.bak"])
    def test_template_must_be_rpt(self, bridge, minimal_params, path):
        result = run(bridge, "crystal-reports-generate", minimal_params(
            "crystal-reports-generate", reportTemplatePath=path,
        ))
        assert result.startswith("ERROR: reportTemplatePath must end with .rpt extension.")

    def test_extension_is_case_insensitive(self, bridge, minimal_params):
        result = run(bridge, "crystal-reports-generate", minimal_params(
            "crystal-reports-generate", reportTemplatePath="QUARTERLY.RPT",
        ))
        assert "Job ID: CR-JOB-" in result

    @pytest.mark.parametrize(
        "output_format,orientation,expected",
        [
            ("PRINTER_LPT1", "PORTRAIT", "PRINTER_LPT1 Warning"),
            ("fax", "PORTRAIT", "FAX Output Warning"),
            ("PDF", "confused", "CONFUSED Orientation Warning"),
        ],
    )
    def test_format_warnings(self, bridge, minimal_params, output_format, orientation, expected):
        result = run(bridge, "crystal-reports-generate", minimal_params(
            "crystal-reports-generate", outputFormat=output_format, pageOrientation=orientation,
        ))
        assert expected in result


class TestTuxedo:
    def test_flag_warnings_in_report(self, bridge, minimal_params):
        result = run(bridge, "tuxedo-transaction-begin", minimal_params(
            "tuxedo-transaction-begin", tpFlags="TPNOTIME, TPNOREPLY, TPTURBO",
        ))
        assert "Transaction ID: TXN-" in result
        assert "WARNING: TPNOTIME flag detected" in result
        assert "WARNING: TPNOREPLY flag detected" in result
        assert "WARNING: Unrecognized flag 'TPTURBO'. Proceeding anyway." in result

    def test_flag_warnings_helper(self):
        assert tp_flag_warnings("TPNOTRAN,TPNOBLOCK") == []
        assert tp_flag_warnings(" , ") == []
        assert len(tp_flag_warnings("tpnotime,bogus")) == 2

    @pytest.mark.parametrize("priority", [0, 101])
    def test_priority_class_range(self, bridge, minimal_params, priority):
        result = run(bridge, "tuxedo-transaction-begin", minimal_params(
            "tuxedo-transaction-begin", priorityClass=priority,
        ))
        assert result.startswith("ERROR: priorityClass must be between 1 and 100.")

    def test_high_priority_warning(self, bridge, minimal_params):
        result = run(bridge, "tuxedo-transaction-begin", minimal_params(
            "tuxedo-transaction-begin", priorityClass=75,
        ))
        assert "Priority Class: 75" in result
        assert "High priority requires quarterly audit justification" in result

    def test_compression_level_range(self, bridge, minimal_params):
        result = run(bridge, "tuxedo-transaction-begin", minimal_params(
            "tuxedo-transaction-begin", compressionLevel=10,
        ))
        assert result.startswith("ERROR: compressionLevel must be between 0 and 9.")


class TestTibco:
    def test_payload_size_and_message_id(self, bridge, minimal_params):
        result = run(bridge, "tibco-rendezvous-publish", minimal_params("tibco-rendezvous-publish"))
        assert "Message ID: RV_" in result
        assert "Payload Size: 12 bytes" in result
        assert "Active Listeners: 0" in result


class TestSiebel:
    def test_customer_record_and_karen(self, bridge, minimal_params):
        result = run(bridge, "siebel-crm-customer-lookup", minimal_params("siebel-crm-customer-lookup"))
        assert "Null Fields: 47" in result
        assert result.count("null") >= 40
        assert "Karen" in result

    def test_all_across_organizations(self, bridge, minimal_params):
        result = run(bridge, "siebel-crm-customer-lookup", minimal_params(
            "siebel-crm-customer-lookup", viewMode="all_across_organizations",
        ))
        assert "You requested ALL_ACROSS_ORGANIZATIONS view." in result


class TestInformatica:
    def test_license_wait(self, bridge, minimal_params):
        result = run(bridge, "informatica-etl-workflow-start", minimal_params("informatica-etl-workflow-start"))
        assert "Workflow Run ID: INFA-WF-" in result
        assert "WAITING_FOR_LICENSE_SERVER" in result

    def test_blame_dba_and_aggressive_pushdown(self, bridge, minimal_params):
        result = run(bridge, "informatica-etl-workflow-start", minimal_params(
            "informatica-etl-workflow-start",
            recoveryStrategy="BLAME_DBA",
            pushdownOptimization="aggressive",
        ))
        assert "BLAME_DBA Recovery Note" in result
        assert "AGGRESSIVE Pushdown Warning" in result


class TestPeopleSoft:
    def test_method_is_case_insensitive(self, bridge, minimal_params):
        result = run(bridge, "peoplesoft-component-interface-call", minimal_params(
            "peoplesoft-component-interface-call", methodName="escalate",
        ))
        assert "Transaction ID: PSFT-TXN-" in result
        assert "ESCALATE Operation Details:" in result
        assert "2-3 pay periods" in result

    def test_invalid_method_rejected(self, bridge, minimal_params):
        with patch.object(bridge.delays, "apply_delay", new_callable=AsyncMock) as apply_delay:
            result = run(bridge, "peoplesoft-component-interface-call", minimal_params(
                "peoplesoft-component-interface-call", methodName="DELETE",
            ))
        assert result == (
            "ERROR: Invalid methodName 'DELETE'. Valid methods are: "
            "GET, FIND, CREATE, UPDATE, CANCEL, APPROVE, DENY, ESCALATE."
        )
        apply_delay.assert_not_awaited()


class TestOptionHelpers:
    @pytest.mark.parametrize("value,expected", [(5, 5), (5.0, 5), (" 7 ", 7), (None, None), ("", None)])
    def test_integer(self, value, expected):
        assert integer({"n": value}, "n") == expected

    @pytest.mark.parametrize("value", [True, 2.5, "seven", [1]])
    def test_integer_rejects(self, value):
        with pytest.raises(InvalidParameter, match="n must be an integer"):
            integer({"n": value}, "n")

    @pytest.mark.parametrize("value,expected", [(True, True), ("yes", True), ("TRUE", True), ("no", False), (1, False)])
    def test_flag(self, value, expected):
        assert flag({"f": value}, "f") is expected

    def test_parse_option(self):
        default = TransactionIsolationLevel.READ_COMMITTED
        assert parse_option(TransactionIsolationLevel, " serializable ", default) is (
            TransactionIsolationLevel.SERIALIZABLE
        )
        assert parse_option(TransactionIsolationLevel, "nonsense", default) is default
        assert parse_option(TransactionIsolationLevel, None, default) is default
