"""SynergyBridge - routes operation calls to their handlers."""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from synergy_bridge.engine.delays import DelayTable
from synergy_bridge.engine.errors import DEFAULT_ERROR_PROBABILITY, ErrorCatalog
from synergy_bridge.engine.responses import ResponseGenerator
from synergy_bridge.reports.renderer import ReportRenderer
from synergy_bridge.tools import ALL_TOOLS, EnterpriseTool

logger = logging.getLogger(__name__)


class UnknownToolError(KeyError):
    """An operation name that no handler is registered for."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown tool: {self.name}"


class SynergyBridge:
    """Registry of the enterprise operations.

    All handlers share one delay table, error catalog, response generator
    and renderer. Invocations are independent coroutines, so many of them
    can wait out their delays at once.
    """

    def __init__(
        self,
        delays: Optional[DelayTable] = None,
        catalog: Optional[ErrorCatalog] = None,
        responses: Optional[ResponseGenerator] = None,
        renderer: Optional[ReportRenderer] = None,
    ) -> None:
        self.delays = delays or DelayTable()
        self.catalog = catalog or ErrorCatalog()
        self.responses = responses or ResponseGenerator()
        self.renderer = renderer or ReportRenderer()

        self._tools: Dict[str, EnterpriseTool] = {}
        for tool_cls in ALL_TOOLS:
            tool = tool_cls(self.delays, self.catalog, self.responses, self.renderer)
            self._tools[tool.name] = tool
        logger.debug("Registered %d enterprise tools", len(self._tools))

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]] = None) -> "SynergyBridge":
        """Build a bridge from a loaded configuration mapping.

        Args:
            config: Configuration as returned by ``Config.load()``
        """
        config = config or {}
        delays = config.get("delays") or {}
        errors = config.get("errors") or {}
        responses = config.get("responses") or {}
        return cls(
            delays=DelayTable(time_scale=delays.get("time_scale", 1.0)),
            catalog=ErrorCatalog(
                probability=errors.get("probability", DEFAULT_ERROR_PROBABILITY)
            ),
            responses=ResponseGenerator(canned_dir=responses.get("canned_dir")),
        )

    def tool_names(self) -> List[str]:
        return list(self._tools)

    def list_tools(self) -> List[Dict[str, Any]]:
        return [tool.describe() for tool in self._tools.values()]

    def get_tool(self, name: str) -> EnterpriseTool:
        """Look up a handler by operation name.

        Raises:
            UnknownToolError: If no handler is registered under ``name``
        """
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    async def invoke(self, name: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Invoke one operation and return its text result."""
        tool = self.get_tool(name)
        return await tool.invoke(params)

    async def invoke_many(
        self, calls: Iterable[Tuple[str, Optional[Mapping[str, Any]]]]
    ) -> List[str]:
        """Invoke several operations concurrently.

        Args:
            calls: ``(name, params)`` pairs

        Returns:
            Results in the same order as ``calls``

        Raises:
            UnknownToolError: If any call names an unregistered operation
        """
        calls = list(calls)
        for name, _ in calls:
            self.get_tool(name)
        return list(await asyncio.gather(*(self.invoke(name, params) for name, params in calls)))
