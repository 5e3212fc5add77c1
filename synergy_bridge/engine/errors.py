"""Catalog of authentic enterprise failures and their random injection."""

import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_ERROR_PROBABILITY = 0.10


@dataclass(frozen=True)
class EnterpriseError:
    """A coded enterprise failure."""

    code: str
    message: str

    def to_error_string(self) -> str:
        return f"{self.code}: {self.message}"

    def __str__(self) -> str:
        return self.to_error_string()


ENTERPRISE_ERRORS: Tuple[EnterpriseError, ...] = (
    EnterpriseError(
        "ERR_7842",
        "License server unreachable. Please contact your IBM representative.",
    ),
    EnterpriseError(
        "ERR_CORBA_0x80004005",
        "Object reference not valid. Have you tried restarting the application server cluster?",
    ),
    EnterpriseError(
        "ERR_WAS_ADMIN",
        "Your WebSphere admin console session has expired. "
        "Please log in again and navigate through 47 menus.",
    ),
    EnterpriseError(
        "ERR_MAINFRAME_CONN",
        "CICS region unavailable. Batch window in progress (next available: Monday 6 AM).",
    ),
    EnterpriseError(
        "ERR_SOA_POLICY",
        "Message rejected by SOA governance layer. Reason: 'Unapproved HTTP verb'.",
    ),
    EnterpriseError(
        "ERR_XML_PARSE",
        "XML parsing failed at line 1, column 1. "
        "Document appears to be valid but spiritually incorrect.",
    ),
    EnterpriseError(
        "ERR_LDAP_TIMEOUT",
        "LDAP query exceeded timeout. Consider narrowing your search "
        "from \"all employees\" to \"some employees\".",
    ),
    EnterpriseError(
        "ERR_LICENSE_COUNT",
        "Maximum concurrent user license exceeded. Current users: 3. Licensed users: 2.",
    ),
    EnterpriseError(
        "ERR_TXN_ROLLBACK",
        "Transaction rolled back. Two-phase commit coordinator lost quorum "
        "(Mercury in retrograde).",
    ),
    EnterpriseError(
        "ERR_VENDOR_SUPPORT",
        "This feature requires Enterprise Edition with Premium Support Gold Plus tier.",
    ),
)


class ErrorCatalog:
    """Decide, once per invocation, whether the enterprise fails today."""

    def __init__(
        self,
        probability: float = DEFAULT_ERROR_PROBABILITY,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize the catalog.

        Args:
            probability: Chance in [0, 1] that an invocation gets an error
            rng: Random source, mainly for deterministic tests

        Raises:
            ValueError: If probability is outside [0, 1]
        """
        if not 0.0 <= probability <= 1.0:
            raise ValueError(
                f"Error probability must be between 0 and 1, got {probability}"
            )
        self._probability = float(probability)
        self._rng = rng or random.Random()

    @property
    def error_probability(self) -> float:
        return self._probability

    @property
    def all_errors(self) -> Tuple[EnterpriseError, ...]:
        return ENTERPRISE_ERRORS

    def maybe_inject_error(self) -> Optional[EnterpriseError]:
        """Roll the dice.

        Returns:
            A uniformly chosen catalog entry with the configured probability,
            otherwise None
        """
        if self._rng.random() >= self._probability:
            return None
        return self._rng.choice(ENTERPRISE_ERRORS)
