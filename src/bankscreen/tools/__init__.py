"""bankscreen.tools: SDK tool definitions with central registry."""

from bankscreen.tools import screener as _screener_tools  # noqa: F401
from bankscreen.tools.registry import ToolDef, ToolRegistry, registry

__all__ = ["ToolDef", "ToolRegistry", "registry"]
