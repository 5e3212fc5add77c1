"""Shared invocation pipeline for every enterprise operation."""

import logging
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple

from synergy_bridge.engine.delays import DelayInterrupted, DelayTable
from synergy_bridge.engine.errors import ErrorCatalog
from synergy_bridge.engine.responses import ResponseGenerator
from synergy_bridge.reports.renderer import ReportRenderer
from synergy_bridge.tools import options
from synergy_bridge.tools.options import InvalidParameter

logger = logging.getLogger(__name__)


class EnterpriseTool:
    """Base class for the simulated enterprise operations.

    Every invocation runs the same stages in order and stops at the first
    one that produces a result:

    1. required parameters are present and non-blank
    2. typed parameters parse, then operation-specific checks pass
    3. the operation's delay is waited out
    4. the error catalog gets its chance to fail the call
    5. the report is rendered

    Every outcome is returned as text. Nothing here raises for bad input.

    Subclasses set the class attributes and override ``validate`` and
    ``context``.
    """

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    required: ClassVar[Tuple[str, ...]] = ()
    required_hints: ClassVar[Dict[str, str]] = {}
    integer_params: ClassVar[Tuple[str, ...]] = ()
    number_params: ClassVar[Tuple[str, ...]] = ()
    parameters: ClassVar[Dict[str, str]] = {}
    interrupted_message: ClassVar[str] = "Operation interrupted."

    def __init__(
        self,
        delays: DelayTable,
        catalog: ErrorCatalog,
        responses: ResponseGenerator,
        renderer: ReportRenderer,
    ) -> None:
        self.delays = delays
        self.catalog = catalog
        self.responses = responses
        self.renderer = renderer

    @property
    def template(self) -> str:
        return f"{self.name}.txt.j2"

    @property
    def delay_seconds(self) -> int:
        return self.delays.get_delay(self.name)

    async def invoke(self, params: Optional[Mapping[str, Any]] = None) -> str:
        """Run the operation.

        Args:
            params: Parameter values keyed by parameter name

        Returns:
            The report, or an ``ERROR:`` text, or an injected error string
        """
        params = dict(params or {})

        problem = self._check_required(params) or self._check_types(params)
        if problem is None:
            problem = self.validate(params)
        if problem is not None:
            logger.debug("[%s] rejected: %s", self.name, problem.splitlines()[0])
            return problem

        try:
            await self.delays.apply_delay(self.name)
        except DelayInterrupted:
            return (
                f"ERROR: {self.interrupted_message}\n"
                "Outcome: INDETERMINATE (the request may or may not have been processed)"
            )

        error = self.catalog.maybe_inject_error()
        if error is not None:
            logger.info("[%s] enterprise error injected: %s", self.name, error.code)
            return error.to_error_string()

        return self.respond(params)

    def _check_required(self, params: Mapping[str, Any]) -> Optional[str]:
        for param in self.required:
            if options.is_blank(params.get(param)):
                hint = self.required_hints.get(param, "")
                return f"ERROR: {param} is required. {hint}".rstrip()
        return None

    def _check_types(self, params: Mapping[str, Any]) -> Optional[str]:
        try:
            for param in self.integer_params:
                options.integer(params, param)
            for param in self.number_params:
                options.number(params, param)
        except InvalidParameter as e:
            return f"ERROR: {e}"
        return None

    def validate(self, params: Mapping[str, Any]) -> Optional[str]:
        """Operation-specific checks run before the delay.

        Returns:
            An ``ERROR:`` text describing the problem, or None
        """
        return None

    def context(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        """Template variables for a successful invocation."""
        raise NotImplementedError

    def respond(self, params: Mapping[str, Any]) -> str:
        return self.renderer.render(self.template, **self.context(params))

    def describe(self) -> Dict[str, Any]:
        """Listing entry for this operation."""
        return {
            "name": self.name,
            "description": self.description,
            "delay_seconds": self.delay_seconds,
            "required": list(self.required),
            "parameters": dict(self.parameters),
        }
