"""MCP models — JSON-RPC 2.0 envelopes, tool definitions, and legacy shapes.

Implements the message format used by the Model Context Protocol for the
``initialize`` handshake, tool discovery (``tools/list``) and execution
(``tools/call``), plus the older ``{"command": ...}`` response envelope.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

PROTOCOL_VERSION = "2024-11-05"
JSONRPC_VERSION = "2.0"

RequestId = int | str

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message. ``id=None`` marks a notification."""

    jsonrpc: str = JSONRPC_VERSION
    method: str
    id: RequestId | None = None
    params: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_notification(self) -> bool:
        return self.id is None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 success response."""

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId
    result: dict[str, Any]


class JsonRpcErrorResponse(BaseModel):
    """A JSON-RPC 2.0 error response; ``id`` is null when it could not be recovered."""

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId | None = None
    error: JsonRpcError


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class MCPToolDef(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}, "required": []},
        alias="inputSchema",
    )


class ServerIdentity(BaseModel):
    """Static name/version announced as ``serverInfo`` at handshake."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str


class Capabilities(BaseModel):
    """Declared capabilities; ``tools`` maps each tool name to its definition."""

    model_config = ConfigDict(frozen=True)

    tools: dict[str, MCPToolDef] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_tool_keys(self) -> Capabilities:
        for key, tool in self.tools.items():
            if key != tool.name:
                msg = f"capability key '{key}' does not match tool name '{tool.name}'"
                raise ValueError(msg)
        return self


class InitializeResult(BaseModel):
    """Result of the ``initialize`` handshake."""

    model_config = ConfigDict(populate_by_name=True)

    protocol_version: str = Field(default=PROTOCOL_VERSION, alias="protocolVersion")
    capabilities: Capabilities
    server_info: ServerIdentity = Field(alias="serverInfo")


class ContentBlock(BaseModel):
    """A typed content block. Fields beyond ``type`` pass through untouched."""

    model_config = ConfigDict(extra="allow")

    type: str


class TextContent(ContentBlock):
    """Plain text content block."""

    type: Literal["text"] = "text"
    text: str


# Text blocks are tried first; any other type is kept as an open ContentBlock.
ContentItem = Annotated[Union[TextContent, ContentBlock], Field(union_mode="left_to_right")]


class CallToolParams(BaseModel):
    """``params`` of a ``tools/call`` request."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class CallToolResult(BaseModel):
    """Uniform result of a tool invocation."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[ContentItem] = Field(default_factory=list)
    is_error: bool | None = Field(default=None, alias="isError")

    @classmethod
    def from_text(cls, text: str, *, is_error: bool | None = None) -> CallToolResult:
        return cls(content=[TextContent(text=text)], is_error=is_error)


class ListToolsResult(BaseModel):
    """Result of ``tools/list``."""

    tools: list[MCPToolDef] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Legacy command envelope
# ---------------------------------------------------------------------------


class LegacyCommand(BaseModel):
    """The pre-JSON-RPC request shape: ``{"command": ..., "arguments": {...}}``."""

    command: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class LegacyError(BaseModel):
    message: str
    suggestion: str | None = None


class LegacyResult(BaseModel):
    success: bool
    message: str | None = None
    error: LegacyError | None = None


class LegacyResponse(BaseModel):
    """Legacy response; correlated by stream order only."""

    type: Literal["response"] = "response"
    result: LegacyResult

    @classmethod
    def from_call_result(cls, result: CallToolResult) -> LegacyResponse:
        """Reshape a uniform tool result into the legacy envelope."""
        texts = [getattr(block, "text", "") or "" for block in result.content]
        first = texts[0] if texts else ""
        if result.is_error:
            suggestion = texts[1] if len(texts) > 1 else None
            return cls(
                result=LegacyResult(
                    success=False,
                    error=LegacyError(message=first, suggestion=suggestion),
                )
            )
        return cls(result=LegacyResult(success=True, message=first))
