"""The engine - delays, failures and canned payloads shared by every operation."""

from synergy_bridge.engine.delays import DelayTable, DelayInterrupted
from synergy_bridge.engine.errors import ErrorCatalog, EnterpriseError
from synergy_bridge.engine.responses import ResponseGenerator

__all__ = [
    "DelayTable",
    "DelayInterrupted",
    "ErrorCatalog",
    "EnterpriseError",
    "ResponseGenerator",
]
