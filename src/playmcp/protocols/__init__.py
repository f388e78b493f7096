"""Protocol layer — JSON-RPC over stdio and its error types."""

from playmcp.protocols.errors import (
    DuplicateToolError,
    HandlerNotRegisteredError,
    MessageParseError,
    ProtocolError,
    ToolArgumentsError,
    ToolError,
    ToolLoadError,
    UnknownMethodError,
)

__all__ = [
    "DuplicateToolError",
    "HandlerNotRegisteredError",
    "MessageParseError",
    "ProtocolError",
    "ToolArgumentsError",
    "ToolError",
    "ToolLoadError",
    "UnknownMethodError",
]
