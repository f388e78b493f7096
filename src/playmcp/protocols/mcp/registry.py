"""HandlerRegistry — the two request-handler slots of an MCP server."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel

from playmcp.protocols.errors import HandlerNotRegisteredError

logger = logging.getLogger(__name__)

ListToolsHandler = Callable[[], Awaitable["BaseModel | dict[str, Any]"]]
CallToolHandler = Callable[[str, dict[str, Any]], Awaitable["BaseModel | dict[str, Any]"]]
Handler = ListToolsHandler | CallToolHandler


class HandlerKind(str, Enum):
    """Logical operations a handler can be registered for."""

    LIST_TOOLS = "listTools"
    CALL_TOOL = "callTool"


class HandlerRegistry:
    """Holds at most one async handler per :class:`HandlerKind`.

    Registration is a plain overwrite (last writer wins). A missing handler
    is only an error when a request needs it, so registration may happen any
    time before the server starts reading.

    Usage::

        registry = HandlerRegistry()
        registry.set_request_handler("listTools", list_tools)
        registry.set_request_handler(HandlerKind.CALL_TOOL, call_tool)
        handler = registry.require(HandlerKind.CALL_TOOL)
    """

    def __init__(self) -> None:
        self._handlers: dict[HandlerKind, Handler] = {}

    def set_request_handler(self, kind: HandlerKind | str, handler: Handler) -> None:
        """Register *handler* for *kind*, replacing any previous one."""
        kind = HandlerKind(kind)
        if kind in self._handlers:
            logger.debug("Replacing %s handler", kind.value)
        self._handlers[kind] = handler

    def get(self, kind: HandlerKind | str) -> Handler | None:
        return self._handlers.get(HandlerKind(kind))

    def require(self, kind: HandlerKind | str) -> Handler:
        """Return the handler for *kind* or raise :class:`HandlerNotRegisteredError`."""
        kind = HandlerKind(kind)
        handler = self._handlers.get(kind)
        if handler is None:
            raise HandlerNotRegisteredError(kind.value)
        return handler

    def __contains__(self, kind: object) -> bool:
        try:
            return HandlerKind(kind) in self._handlers  # type: ignore[arg-type]
        except ValueError:
            return False
