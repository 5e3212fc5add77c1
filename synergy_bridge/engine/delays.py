"""Enterprise-grade latency for every operation."""

import asyncio
import logging
from types import MappingProxyType
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 5

REALISTIC_DELAYS: Mapping[str, int] = MappingProxyType({
    "websphere-deploy-ejb": 8,
    "cobol-copybook-transform": 3,
    "mainframe-jcl-submit": 5,
    "soa-governance-validate": 4,
    "enterprise-service-bus-route": 6,
    "ldap-corporate-directory-sync": 7,
    "crystal-reports-generate": 12,
    "tuxedo-transaction-begin": 4,
    "tibco-rendezvous-publish": 2,
    "siebel-crm-customer-lookup": 9,
    "informatica-etl-workflow-start": 6,
    "peoplesoft-component-interface-call": 7,
})


class DelayInterrupted(Exception):
    """Raised when the task waiting out a delay is cancelled."""

    def __init__(self, tool_name: Optional[str], delay_seconds: int) -> None:
        super().__init__(
            f"Delay for [{tool_name}] interrupted before {delay_seconds}s elapsed"
        )
        self.tool_name = tool_name
        self.delay_seconds = delay_seconds


class DelayTable:
    """Map operation names to their configured delay and wait it out.

    The wait never blocks the event loop, so any number of invocations can
    sit in their delay at the same time.
    """

    def __init__(self, time_scale: float = 1.0) -> None:
        """Initialize the delay table.

        Args:
            time_scale: Multiplier applied to the wall-clock wait. 1.0 waits
                the full delay, 0 skips it. Reported delays are unaffected.

        Raises:
            ValueError: If time_scale is negative
        """
        if time_scale < 0:
            raise ValueError(f"time_scale must be >= 0, got {time_scale}")
        self.time_scale = float(time_scale)

    def get_delay(self, tool_name: Optional[str]) -> int:
        """Get the delay in seconds for an operation.

        Unknown, empty and missing names get DEFAULT_DELAY.
        """
        if not tool_name:
            return DEFAULT_DELAY
        return REALISTIC_DELAYS.get(tool_name, DEFAULT_DELAY)

    async def apply_delay(self, tool_name: Optional[str]) -> None:
        """Suspend the calling task for the operation's delay.

        Args:
            tool_name: Operation identifier

        Raises:
            DelayInterrupted: If the task is cancelled while waiting
        """
        delay = self.get_delay(tool_name)
        logger.info(
            ">>> Tool invoked: [%s] - applying %ds enterprise-grade delay...",
            tool_name, delay,
        )
        try:
            await asyncio.sleep(delay * self.time_scale)
        except asyncio.CancelledError as e:
            logger.warning("Delay for [%s] interrupted", tool_name)
            raise DelayInterrupted(tool_name, delay) from e
        logger.info(
            "<<< Tool complete: [%s] - delay fulfilled, returning response",
            tool_name,
        )
