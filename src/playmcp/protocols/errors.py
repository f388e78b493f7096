"""Shared error types for the protocol layer.

Every :class:`ProtocolError` maps onto a JSON-RPC error envelope. The
dispatcher reads ``code`` and ``suggestion`` off the exception; anything else
raised by a handler is reported with the default code and suggestion.
"""

from __future__ import annotations

INTERNAL_ERROR = -32603


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.suggestion = suggestion
        super().__init__(message)


class MessageParseError(ProtocolError):
    """An input line is not valid JSON or not a recognizable message."""


class UnknownMethodError(ProtocolError):
    """The message names a method this server does not implement."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Unknown method: {method}")


class HandlerNotRegisteredError(ProtocolError):
    """A protocol method arrived before its handler was registered."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        label = "list tools" if kind == "listTools" else "call tool"
        super().__init__(f"No {label} handler registered")


class ToolError(ProtocolError):
    """A tool operation failed; raised by tool implementations.

    ``suggestion`` is a human hint forwarded to the caller next to the
    message, e.g. ``ToolError("Browser not open", "Call openBrowser first")``.
    """


class ToolArgumentsError(ProtocolError):
    """Tool arguments do not match the tool's input schema."""

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        self.detail = detail
        super().__init__(
            f"Invalid arguments for tool {name}" + (f": {detail}" if detail else ""),
            suggestion="Check the tool's inputSchema from tools/list",
        )


class DuplicateToolError(ProtocolError):
    """A tool name was registered twice in the same catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool already registered: {name}")


class ToolLoadError(ProtocolError):
    """A ``module:attribute`` tool catalog reference could not be resolved."""
