"""playmcp — line-delimited JSON-RPC tool server over stdio."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from playmcp.protocols.mcp.server import MCPServer as MCPServer
    from playmcp.tools.registry import ToolRegistry as ToolRegistry

_LAZY_EXPORTS = {
    "MCPServer": "playmcp.protocols.mcp.server",
    "ToolRegistry": "playmcp.tools.registry",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'playmcp' has no attribute {name!r}")
