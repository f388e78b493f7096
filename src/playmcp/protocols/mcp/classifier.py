"""Message classifier — turns one framed line into a closed message variant.

The classifier is synchronous and never raises: malformed input becomes a
:class:`Malformed` variant carrying whatever request id could be recovered,
so the dispatcher can still correlate the error response.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import ValidationError

from playmcp.protocols.mcp.models import CallToolParams, RequestId


class MCPMethod(str, Enum):
    """JSON-RPC methods this server implements."""

    INITIALIZE = "initialize"
    INITIALIZED = "notifications/initialized"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"


# ---------------------------------------------------------------------------
# Message variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Initialize:
    id: RequestId | None
    params: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class InitializedNotification:
    pass


@dataclass(frozen=True)
class ListTools:
    id: RequestId | None


@dataclass(frozen=True)
class CallTool:
    id: RequestId | None
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Legacy:
    """Pre-JSON-RPC ``{"command": ...}`` message; has no correlation id."""

    command: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Notification:
    """An id-less JSON-RPC message for a method we do not implement."""

    method: str


@dataclass(frozen=True)
class UnknownMethod:
    id: RequestId
    method: str


@dataclass(frozen=True)
class Malformed:
    id: RequestId | None
    reason: str


Message = (
    Initialize
    | InitializedNotification
    | ListTools
    | CallTool
    | Legacy
    | Notification
    | UnknownMethod
    | Malformed
)

# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

_ID_VALUE = re.compile(r'\s*:\s*(-?\d+(?![\d.eE])|"(?:[^"\\]|\\.)*")')


def recover_id(raw: str) -> RequestId | None:
    """Best-effort scan of unparseable text for the top-level ``"id"`` value.

    Only an ``"id"`` key of the outermost object counts; ids nested in
    ``params`` belong to tool arguments, not to the request.
    """
    depth = 0
    pos = 0
    while pos < len(raw):
        char = raw[pos]
        if char == '"':
            end = _string_end(raw, pos)
            if end is None:
                return None
            if depth == 1 and raw[pos + 1 : end] == "id":
                match = _ID_VALUE.match(raw, end + 1)
                if match is not None:
                    return _decode_id(match.group(1))
            pos = end + 1
            continue
        if char in "{[":
            depth += 1
        elif char in "}]":
            depth -= 1
        pos += 1
    return None


def _string_end(raw: str, start: int) -> int | None:
    """Index of the quote closing the string that opens at *start*."""
    pos = start + 1
    while pos < len(raw):
        if raw[pos] == "\\":
            pos += 2
            continue
        if raw[pos] == '"':
            return pos
        pos += 1
    return None


def _decode_id(token: str) -> RequestId | None:
    try:
        value = json.loads(token)
    except ValueError:
        return None
    return value if _is_valid_id(value) else None


def classify(line: str) -> Message:
    """Parse *line* as JSON and determine its message shape."""
    try:
        message = json.loads(line)
    except ValueError as exc:
        return Malformed(id=recover_id(line), reason=str(exc))

    if not isinstance(message, dict):
        return Malformed(id=None, reason="Message must be a JSON object")

    raw_id = message.get("id")
    if raw_id is not None and not _is_valid_id(raw_id):
        return Malformed(id=None, reason=f"Invalid request id: {raw_id!r}")
    request_id: RequestId | None = raw_id

    method = message.get("method")
    if method is not None:
        return _classify_method(method, request_id, message.get("params"))

    if "command" in message:
        return _classify_legacy(message)

    return Malformed(id=request_id, reason="Unrecognized message: expected 'method' or 'command'")


def _classify_method(method: Any, request_id: RequestId | None, params: Any) -> Message:
    if not isinstance(method, str):
        return Malformed(id=request_id, reason="'method' must be a string")
    if params is None:
        params = {}
    if not isinstance(params, dict):
        return Malformed(id=request_id, reason="'params' must be an object")

    try:
        kind = MCPMethod(method)
    except ValueError:
        if request_id is None:
            return Notification(method=method)
        return UnknownMethod(id=request_id, method=method)

    if kind is MCPMethod.INITIALIZE:
        return Initialize(id=request_id, params=params)
    if kind is MCPMethod.INITIALIZED:
        return InitializedNotification()
    if kind is MCPMethod.TOOLS_LIST:
        return ListTools(id=request_id)

    try:
        call = CallToolParams.model_validate(_none_to_default(params))
    except ValidationError as exc:
        return Malformed(
            id=request_id,
            reason=f"Invalid params for tools/call: {format_validation_error(exc)}",
        )
    return CallTool(id=request_id, name=call.name, arguments=call.arguments)


def _classify_legacy(message: dict[str, Any]) -> Message:
    command = message.get("command")
    arguments = message.get("arguments")
    if arguments is None:
        arguments = {}
    if not isinstance(command, str):
        return Malformed(id=None, reason="'command' must be a string")
    if not isinstance(arguments, dict):
        return Malformed(id=None, reason="'arguments' must be an object")
    return Legacy(command=command, arguments=arguments)


def _none_to_default(params: dict[str, Any]) -> dict[str, Any]:
    # ``"arguments": null`` means no arguments
    if params.get("arguments", {}) is None:
        return {k: v for k, v in params.items() if k != "arguments"}
    return params


def _is_valid_id(value: Any) -> bool:
    return isinstance(value, (int, str)) and not isinstance(value, bool)


def format_validation_error(exc: ValidationError) -> str:
    """Render a pydantic error as ``field: message; field: message``."""
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "(root)"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
