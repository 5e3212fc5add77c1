"""Canned enterprise payloads and identifier generation.

Payloads live as plain files in ``engine/canned/``. Each file is read once
per generator and cached. A missing or unreadable file never fails the
caller: a smaller built-in payload of the same shape is used instead and a
warning is logged.
"""

import json
import logging
import random
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

CANNED_DIR = Path(__file__).parent / "canned"

COBOL_OUTPUT_FILE = "cobol-output.json"
SIEBEL_CUSTOMER_FILE = "siebel-customer.json"
GOVERNANCE_WARNINGS_FILE = "governance-warnings.txt"
MAINFRAME_STATUSES_FILE = "mainframe-statuses.txt"

DEFAULT_MAINFRAME_STATUSES = (
    "HELD - AWAITING TAPE MOUNT",
    "QUEUED - POSITION 847",
    "WAITING FOR INITIATOR",
    "ABEND S0C7 - CONTACT SYSTEMS PROGRAMMING",
)

_DEFAULT_COBOL_OUTPUT = {
    "CUSTOMER-RECORD": {
        "CUST-ID": "0000000000",
        "FILLER": "          ",
        "CUST-BALANCE": "SEE_MAINFRAME_DOCUMENTATION",
        "FILLER-2": "          ",
    }
}

_DEFAULT_SIEBEL_FIELDS = (
    "Location", "Type", "MainPhoneNumber", "EmailAddress", "Industry",
    "Region", "SalesRep", "AnnualRevenue", "CreditLimit", "BillingCity",
    "ShippingCity", "LastActivityDate",
)


def _default_governance_warnings() -> List[str]:
    warnings = [
        "Warning: Consider migrating to microservices (issued since 2015)",
        "Warning: SOAP 1.1 detected. SOAP 1.2 recommended since 2007",
        "Warning: Namespace prefix 'ns1' is not descriptive",
        "Warning: Service name does not follow naming convention "
        "CORP-[DIVISION]-[APP]-[VER]-Service",
    ]
    for i in range(len(warnings) + 1, 148):
        warnings.append(f"Warning: Generic governance issue #{i}")
    return warnings


def _epoch_millis() -> int:
    return int(time.time() * 1000)


class ResponseGenerator:
    """Serve canned payloads and mint identifiers.

    Every ``generate_*`` method remembers the last value it handed out and
    redraws on an exact repeat, so two consecutive calls never return the
    same identifier.
    """

    def __init__(
        self,
        canned_dir: Optional[Union[str, Path]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize the generator.

        Args:
            canned_dir: Directory holding the canned payload files. Defaults
                to the files shipped with the package.
            rng: Random source, mainly for deterministic tests
        """
        self.canned_dir = Path(canned_dir) if canned_dir else CANNED_DIR
        self._rng = rng or random.Random()
        self._cache: Dict[str, Optional[str]] = {}
        self._last_issued: Dict[str, str] = {}

    def _load(self, filename: str) -> Optional[str]:
        """Read a canned file once, returning None when it is unavailable."""
        if filename in self._cache:
            return self._cache[filename]

        path = self.canned_dir / filename
        content: Optional[str]
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning(
                "Canned response not found: %s. Falling back to built-in default "
                "(please contact your system administrator, expected response "
                "time: 3-5 business days).",
                path,
            )
            content = None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to load canned response %s: %s", path, e)
            content = None

        self._cache[filename] = content
        return content

    def _load_lines(self, filename: str) -> List[str]:
        content = self._load(filename)
        if not content:
            return []
        return [line for line in content.splitlines() if line.strip()]

    def cobol_output(self) -> str:
        """Transformed copybook payload, complete with FILLER fields."""
        content = self._load(COBOL_OUTPUT_FILE)
        if content and content.strip():
            return content.rstrip("\n")
        return json.dumps(_DEFAULT_COBOL_OUTPUT, indent=2)

    def siebel_customer(self) -> str:
        """Customer 360 record, mostly nulls."""
        content = self._load(SIEBEL_CUSTOMER_FILE)
        if content and content.strip():
            return content.rstrip("\n")
        account = {"Id": "1-0000-00", "Name": "UNKNOWN"}
        account.update({field: None for field in _DEFAULT_SIEBEL_FIELDS})
        return json.dumps({"Account": account}, indent=2)

    def governance_warnings(self) -> List[str]:
        """All governance warnings, one per non-blank line of the canned file."""
        warnings = self._load_lines(GOVERNANCE_WARNINGS_FILE)
        return warnings or _default_governance_warnings()

    def random_mainframe_status(self) -> str:
        statuses = self._load_lines(MAINFRAME_STATUSES_FILE) or list(DEFAULT_MAINFRAME_STATUSES)
        return self._rng.choice(statuses)

    def _fresh(self, kind: str, build: Callable[[], str]) -> str:
        value = build()
        while value == self._last_issued.get(kind):
            value = build()
        self._last_issued[kind] = value
        return value

    def generate_job_id(self) -> str:
        """Mainframe job id, e.g. ``JOB48213``."""
        return self._fresh("job", lambda: f"JOB{self._rng.randint(10000, 99999)}")

    def generate_transaction_id(self) -> str:
        """Tuxedo transaction id, e.g. ``TXN-1700000000000-4821``."""
        return self._fresh(
            "txn",
            lambda: f"TXN-{_epoch_millis()}-{self._rng.randint(1000, 9999)}",
        )

    def generate_message_id(self) -> str:
        return self._fresh(
            "rv",
            lambda: f"RV_{_epoch_millis()}_{self._rng.randint(0, 99999):05d}",
        )

    def generate_report_job_id(self) -> str:
        return self._fresh(
            "crystal",
            lambda: f"CR-JOB-{_epoch_millis()}-{self._rng.randint(100, 999)}",
        )

    def generate_workflow_run_id(self) -> str:
        return self._fresh(
            "informatica",
            lambda: f"INFA-WF-{_epoch_millis()}-{self._rng.randint(100, 999)}",
        )

    def generate_peoplesoft_transaction_id(self) -> str:
        return self._fresh(
            "peoplesoft",
            lambda: f"PSFT-TXN-{_epoch_millis()}-{self._rng.randint(100, 999)}",
        )
