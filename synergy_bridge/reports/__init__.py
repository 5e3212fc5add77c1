"""Report rendering for operation results."""

from synergy_bridge.reports.renderer import ReportRenderer

__all__ = ["ReportRenderer"]
