"""Tool catalog — the collaborator behind the list and call handlers."""

from playmcp.tools.loader import load_tool_registry
from playmcp.tools.registry import RegisteredTool, ToolRegistry

__all__ = ["RegisteredTool", "ToolRegistry", "load_tool_registry"]
