import logging
import random

import pytest

from synergy_bridge.bridge import SynergyBridge
from synergy_bridge.engine.delays import DelayTable
from synergy_bridge.engine.errors import ErrorCatalog
from synergy_bridge.engine.responses import ResponseGenerator

# Smallest parameter set each operation accepts
MINIMAL_PARAMS = {
    "websphere-deploy-ejb": {"earFilePath": "/opt/apps/payroll.ear", "clusterName": "PROD-CLUSTER-01"},
    "cobol-copybook-transform": {"copybookSource": "01 CUSTOMER-RECORD.\n   05 CUST-ID PIC 9(10)."},
    "mainframe-jcl-submit": {"jclSource": "//PAYROLL JOB (ACCT),'BATCH'\n//STEP1 EXEC PGM=IEFBR14"},
    "soa-governance-validate": {"wsdlEndpoint": "http://esb.megacorp.local/CustomerService?wsdl"},
    "enterprise-service-bus-route": {"sourceQueue": "CORP.ORDERS.IN", "destinationTopic": "CORP.ORDERS.OUT"},
    "ldap-corporate-directory-sync": {"baseDn": "ou=Users,dc=megacorp,dc=com"},
    "crystal-reports-generate": {"reportTemplatePath": "C:\\Reports\\quarterly.rpt"},
    "tuxedo-transaction-begin": {"domainId": "TUXDOM1", "serviceName": "TRANSFER_FUNDS"},
    "tibco-rendezvous-publish": {"subject": "CORP.TRADE.EQUITY.>", "messagePayload": "BUY 100 ACME"},
    "siebel-crm-customer-lookup": {"searchSpec": "[Name] LIKE 'Mega*'", "businessComponent": "Account"},
    "informatica-etl-workflow-start": {"folderName": "FINANCE", "workflowName": "wf_nightly_gl_load"},
    "peoplesoft-component-interface-call": {"componentInterfaceName": "CI_PERSONAL_DATA", "methodName": "GET"},
}


@pytest.fixture(autouse=True)
def reset_package_logger():
    """The CLI detaches the package logger from root; put it back for caplog."""
    yield
    logger = logging.getLogger("synergy_bridge")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def instant_delays():
    return DelayTable(time_scale=0)


@pytest.fixture
def no_errors():
    return ErrorCatalog(probability=0.0)


@pytest.fixture
def always_errors():
    return ErrorCatalog(probability=1.0, rng=random.Random(7))


@pytest.fixture
def bridge(instant_delays, no_errors):
    """Bridge with no waiting and no injected failures."""
    return SynergyBridge(
        delays=instant_delays,
        catalog=no_errors,
        responses=ResponseGenerator(rng=random.Random(42)),
    )


@pytest.fixture
def failing_bridge(instant_delays, always_errors):
    """Bridge where every call that reaches the error stage fails."""
    return SynergyBridge(delays=instant_delays, catalog=always_errors)


@pytest.fixture
def minimal_params():
    def _params(tool_name, **overrides):
        params = dict(MINIMAL_PARAMS[tool_name])
        params.update(overrides)
        return params

    return _params
