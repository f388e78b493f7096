"""MCP protocol — Model Context Protocol server over stdio."""

from __future__ import annotations

from typing import TYPE_CHECKING

from playmcp.protocols.mcp.classifier import MCPMethod, classify
from playmcp.protocols.mcp.framing import LineFramer
from playmcp.protocols.mcp.models import (
    CallToolResult,
    Capabilities,
    ContentBlock,
    JsonRpcError,
    JsonRpcErrorResponse,
    JsonRpcRequest,
    JsonRpcResponse,
    LegacyResponse,
    ListToolsResult,
    MCPToolDef,
    ServerIdentity,
    TextContent,
)
from playmcp.protocols.mcp.registry import HandlerKind, HandlerRegistry
from playmcp.protocols.mcp.transport import ServerTransport, StdioServerTransport, StreamTransport
from playmcp.protocols.mcp.writer import ResponseWriter

if TYPE_CHECKING:
    from playmcp.protocols.mcp.server import MCPServer as MCPServer

__all__ = [
    "CallToolResult",
    "Capabilities",
    "ContentBlock",
    "HandlerKind",
    "HandlerRegistry",
    "JsonRpcError",
    "JsonRpcErrorResponse",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "LegacyResponse",
    "LineFramer",
    "ListToolsResult",
    "MCPMethod",
    "MCPServer",
    "MCPToolDef",
    "ResponseWriter",
    "ServerIdentity",
    "ServerTransport",
    "StdioServerTransport",
    "StreamTransport",
    "TextContent",
    "classify",
]


def __getattr__(name: str) -> object:
    # The server imports playmcp.config, which imports this package's models.
    if name == "MCPServer":
        from playmcp.protocols.mcp.server import MCPServer

        return MCPServer
    raise AttributeError(f"module 'playmcp.protocols.mcp' has no attribute {name!r}")
