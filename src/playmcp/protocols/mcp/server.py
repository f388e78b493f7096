"""MCPServer — reads framed JSON-RPC lines, dispatches them, writes responses.

The server owns its :class:`HandlerRegistry`; tools are plugged in by
registering a *list* and a *call* handler before :meth:`MCPServer.connect`.
``initialize`` and ``notifications/initialized`` are answered by the server
itself.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

from playmcp.config import ServerConfig
from playmcp.protocols.errors import (
    INTERNAL_ERROR,
    MessageParseError,
    ProtocolError,
    UnknownMethodError,
)
from playmcp.protocols.mcp.classifier import (
    CallTool,
    Initialize,
    InitializedNotification,
    Legacy,
    ListTools,
    Malformed,
    MCPMethod,
    Message,
    Notification,
    UnknownMethod,
    classify,
)
from playmcp.protocols.mcp.framing import LineFramer
from playmcp.protocols.mcp.models import (
    CallToolResult,
    Capabilities,
    InitializeResult,
    LegacyResponse,
    RequestId,
)
from playmcp.protocols.mcp.registry import Handler, HandlerKind, HandlerRegistry
from playmcp.protocols.mcp.transport import StdioServerTransport
from playmcp.protocols.mcp.writer import ResponseWriter
from playmcp.utils.telemetry import (
    ATTR_DISPATCH_MODE,
    ATTR_ERROR,
    ATTR_METHOD,
    ATTR_REQUEST_ID,
    ATTR_TOOL_NAME,
    get_tracer,
)

if TYPE_CHECKING:
    from opentelemetry.trace import Span

    from playmcp.protocols.mcp.transport import ServerTransport

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class MCPServer:
    """Line-delimited JSON-RPC server for tool discovery and invocation.

    Usage::

        server = MCPServer(ServerConfig(name="browser"), registry.capabilities())
        server.set_request_handler("listTools", registry.list_tools)
        server.set_request_handler("callTool", registry.call_tool)
        await server.connect()          # serves stdin/stdout until EOF

    Response ordering follows ``config.dispatch_mode``; see
    :class:`~playmcp.config.ServerConfig`.
    """

    def __init__(
        self,
        config: ServerConfig | None = None,
        capabilities: Capabilities | None = None,
        *,
        registry: HandlerRegistry | None = None,
    ) -> None:
        self._config = config or ServerConfig()
        self._capabilities = capabilities or Capabilities()
        self._registry = registry or HandlerRegistry()

    @property
    def config(self) -> ServerConfig:
        return self._config

    @property
    def capabilities(self) -> Capabilities:
        return self._capabilities

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    def set_request_handler(self, kind: HandlerKind | str, handler: Handler) -> None:
        """Register the *list* or *call* handler (last writer wins)."""
        self._registry.set_request_handler(kind, handler)

    # ------------------------------------------------------------------
    # Read loop
    # ------------------------------------------------------------------

    async def connect(self, transport: ServerTransport | None = None) -> None:
        """Serve *transport* (stdio by default) until its input reaches EOF."""
        if transport is None:
            transport = StdioServerTransport(chunk_size=self._config.read_chunk_size)
        await transport.open()
        writer = ResponseWriter(transport)
        logger.info(
            "%s %s accepting requests (dispatch=%s)",
            self._config.name,
            self._config.version,
            self._config.dispatch_mode,
        )
        try:
            if self._config.dispatch_mode == "fifo":
                await self._serve_fifo(transport, writer)
            else:
                await self._serve_concurrent(transport, writer)
        finally:
            await transport.close()
        logger.info("Input closed; server stopped")

    async def _serve_fifo(self, transport: ServerTransport, writer: ResponseWriter) -> None:
        """One consumer: line N+1 is dispatched after line N's response is written."""
        queue: asyncio.Queue[str | None] = asyncio.Queue()
        worker = asyncio.create_task(self._consume(queue, writer))
        try:
            async for line in self._read_lines(transport):
                queue.put_nowait(line)
            queue.put_nowait(None)
            await worker
        finally:
            worker.cancel()

    async def _consume(self, queue: asyncio.Queue[str | None], writer: ResponseWriter) -> None:
        while (line := await queue.get()) is not None:
            await self.handle_line(line, writer)

    async def _serve_concurrent(
        self, transport: ServerTransport, writer: ResponseWriter
    ) -> None:
        """Dispatch every line immediately; output follows completion order."""
        in_flight: set[asyncio.Task[None]] = set()
        async for line in self._read_lines(transport):
            task = asyncio.create_task(self.handle_line(line, writer))
            in_flight.add(task)
            task.add_done_callback(in_flight.discard)
        if in_flight:
            await asyncio.gather(*in_flight)

    async def _read_lines(self, transport: ServerTransport) -> AsyncIterator[str]:
        framer = LineFramer()
        while chunk := await transport.read():
            for line in framer.feed(chunk):
                yield line
        for line in framer.flush():
            yield line

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def handle_line(self, line: str, writer: ResponseWriter) -> None:
        """Classify, dispatch and answer one line. Never raises per-message errors."""
        message = classify(line)
        request_id, answerable = _correlation(message)
        with _tracer.start_as_current_span("mcp.dispatch") as span:
            span.set_attribute(ATTR_METHOD, _method_name(message))
            span.set_attribute(ATTR_DISPATCH_MODE, self._config.dispatch_mode)
            if request_id is not None:
                span.set_attribute(ATTR_REQUEST_ID, str(request_id))
            try:
                await self._dispatch(message, writer, span)
            except Exception as exc:
                span.set_attribute(ATTR_ERROR, str(exc))
                logger.warning("%s failed: %s", _method_name(message), exc)
                logger.debug("Dispatch failure", exc_info=True)
                if not answerable:
                    return
                suggestion = getattr(exc, "suggestion", None)
                writer.error(
                    request_id,
                    str(exc) or exc.__class__.__name__,
                    code=exc.code if isinstance(exc, ProtocolError) else INTERNAL_ERROR,
                    suggestion=str(suggestion) if suggestion else self._config.default_suggestion,
                )

    async def _dispatch(self, message: Message, writer: ResponseWriter, span: Span) -> None:
        if isinstance(message, Initialize):
            if message.id is not None:
                writer.result(message.id, self.initialize_result())
        elif isinstance(message, (InitializedNotification, Notification)):
            logger.debug("Notification acknowledged: %s", _method_name(message))
        elif isinstance(message, ListTools):
            handler = self._registry.require(HandlerKind.LIST_TOOLS)
            result = await handler()  # type: ignore[call-arg]
            if message.id is not None:
                writer.result(message.id, result)
        elif isinstance(message, CallTool):
            span.set_attribute(ATTR_TOOL_NAME, message.name)
            handler = self._registry.require(HandlerKind.CALL_TOOL)
            result = await handler(message.name, message.arguments)  # type: ignore[call-arg]
            if message.id is not None:
                writer.result(message.id, result)
        elif isinstance(message, Legacy):
            span.set_attribute(ATTR_TOOL_NAME, message.command)
            handler = self._registry.require(HandlerKind.CALL_TOOL)
            result = await handler(message.command, message.arguments)  # type: ignore[call-arg]
            writer.legacy(LegacyResponse.from_call_result(_as_call_result(result)))
        elif isinstance(message, UnknownMethod):
            raise UnknownMethodError(message.method)
        elif isinstance(message, Malformed):
            raise MessageParseError(message.reason)
        else:
            msg = f"Unhandled message variant: {type(message).__name__}"
            raise TypeError(msg)

    def initialize_result(self) -> InitializeResult:
        """The built-in answer to ``initialize``."""
        return InitializeResult(
            protocol_version=self._config.protocol_version,
            capabilities=self._capabilities,
            server_info=self._config.identity,
        )


def _as_call_result(result: Any) -> CallToolResult:
    if isinstance(result, CallToolResult):
        return result
    return CallToolResult.model_validate(result)


def _correlation(message: Message) -> tuple[RequestId | None, bool]:
    """Return the request id and whether the message may produce output."""
    if isinstance(message, Legacy):
        return None, True
    if isinstance(message, Malformed):
        return message.id, True
    if isinstance(message, (InitializedNotification, Notification)):
        return None, False
    return message.id, message.id is not None


def _method_name(message: Message) -> str:
    if isinstance(message, Initialize):
        return MCPMethod.INITIALIZE.value
    if isinstance(message, InitializedNotification):
        return MCPMethod.INITIALIZED.value
    if isinstance(message, ListTools):
        return MCPMethod.TOOLS_LIST.value
    if isinstance(message, CallTool):
        return MCPMethod.TOOLS_CALL.value
    if isinstance(message, Legacy):
        return "command"
    if isinstance(message, (Notification, UnknownMethod)):
        return message.method
    return "malformed"
