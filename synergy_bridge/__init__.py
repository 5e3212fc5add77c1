"""SynergyBridge - enterprise integration, faithfully simulated."""

__version__ = "9.0.0.1"

from synergy_bridge.bridge import SynergyBridge, UnknownToolError

__all__ = ["SynergyBridge", "UnknownToolError", "__version__"]
