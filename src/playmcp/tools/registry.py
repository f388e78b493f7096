"""ToolRegistry — the tool catalog behind the server's list and call handlers.

The registry maps tool names to a definition (name, description, input
schema) and an async implementation. It knows nothing about the wire: the
server calls :meth:`ToolRegistry.list_tools` and :meth:`ToolRegistry.call_tool`
through its handler slots.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from playmcp.protocols.errors import DuplicateToolError, ToolArgumentsError, ToolError
from playmcp.protocols.mcp.classifier import format_validation_error
from playmcp.protocols.mcp.models import (
    CallToolResult,
    Capabilities,
    ListToolsResult,
    MCPToolDef,
)
from playmcp.protocols.mcp.registry import HandlerKind
from playmcp.tools.schema import ToolArguments, build_arguments_model

if TYPE_CHECKING:
    from playmcp.protocols.mcp.server import MCPServer

logger = logging.getLogger(__name__)

ToolFunc = Callable[..., Awaitable["str | CallToolResult | dict[str, Any]"]]


@dataclass(frozen=True)
class RegisteredTool:
    """A catalog entry: the advertised definition plus its implementation."""

    definition: MCPToolDef
    func: ToolFunc
    arguments_model: type[ToolArguments]


class ToolRegistry:
    """Ordered name-to-tool map that serves ``tools/list`` and ``tools/call``.

    Usage::

        registry = ToolRegistry()

        @registry.tool(
            "navigate",
            description="Navigate to a URL",
            input_schema={
                "type": "object",
                "properties": {"url": {"type": "string"}},
                "required": ["url"],
            },
        )
        async def navigate(url: str) -> str:
            await browser.goto(url)
            return "Navigation successful"

        registry.install(server)

    Tools receive their validated arguments as keyword arguments and return a
    string (one text block), a :class:`CallToolResult`, or a dict of that shape.
    Raising :class:`ToolError` reports a failure with an optional suggestion.
    """

    def __init__(self) -> None:
        self._tools: dict[str, RegisteredTool] = {}

    def register(
        self,
        name: str,
        func: ToolFunc,
        *,
        description: str = "",
        input_schema: dict[str, Any] | None = None,
    ) -> MCPToolDef:
        """Add a tool to the catalog; names must be unique."""
        if name in self._tools:
            raise DuplicateToolError(name)
        schema = input_schema or {"type": "object", "properties": {}, "required": []}
        definition = MCPToolDef(name=name, description=description, input_schema=schema)
        self._tools[name] = RegisteredTool(
            definition=definition,
            func=func,
            arguments_model=build_arguments_model(name, schema),
        )
        logger.debug("Registered tool %s", name)
        return definition

    def tool(
        self,
        name: str | None = None,
        *,
        description: str | None = None,
        input_schema: dict[str, Any] | None = None,
    ) -> Callable[[ToolFunc], ToolFunc]:
        """Decorator form of :meth:`register`.

        The name defaults to the function name and the description to the
        first line of its docstring.
        """

        def decorator(func: ToolFunc) -> ToolFunc:
            doc = inspect.getdoc(func) or ""
            self.register(
                name or func.__name__,
                func,
                description=description if description is not None else doc.split("\n", 1)[0],
                input_schema=input_schema,
            )
            return func

        return decorator

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tools)

    def descriptors(self) -> list[MCPToolDef]:
        """Tool definitions in registration order."""
        return [entry.definition for entry in self._tools.values()]

    def capabilities(self) -> Capabilities:
        """The ``capabilities`` block announced at ``initialize``."""
        return Capabilities(tools={name: entry.definition for name, entry in self._tools.items()})

    async def list_tools(self) -> ListToolsResult:
        """List handler: every registered definition."""
        return ListToolsResult(tools=self.descriptors())

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> CallToolResult:
        """Call handler: validate arguments, run the tool, shape its result.

        Unknown tools and tool failures are reported inside the result
        (``isError``); argument/schema mismatches raise
        :class:`ToolArgumentsError` so the transport answers with an error
        envelope.
        """
        entry = self._tools.get(name)
        if entry is None:
            return CallToolResult.from_text(f"Unknown tool: {name}", is_error=True)

        try:
            validated = entry.arguments_model.model_validate(arguments)
        except ValidationError as exc:
            raise ToolArgumentsError(name, format_validation_error(exc)) from exc

        try:
            outcome = await entry.func(**validated.model_dump(exclude_unset=True))
            return _to_call_result(outcome)
        except ToolError as exc:
            logger.warning("Tool %s failed: %s", name, exc)
            text = f"Error: {exc}"
            if exc.suggestion:
                text += f"\nSuggestion: {exc.suggestion}"
            return CallToolResult.from_text(text, is_error=True)
        except Exception as exc:
            logger.warning("Tool %s raised %s: %s", name, type(exc).__name__, exc)
            return CallToolResult.from_text(f"Error: {exc}", is_error=True)

    def install(self, server: MCPServer) -> None:
        """Register this catalog's list and call handlers on *server*."""
        server.set_request_handler(HandlerKind.LIST_TOOLS, self.list_tools)
        server.set_request_handler(HandlerKind.CALL_TOOL, self.call_tool)


def _to_call_result(outcome: Any) -> CallToolResult:
    if isinstance(outcome, CallToolResult):
        return outcome
    if isinstance(outcome, str):
        return CallToolResult.from_text(outcome)
    if isinstance(outcome, dict):
        return CallToolResult.model_validate(outcome)
    msg = f"Tool returned unsupported result type: {type(outcome).__name__}"
    raise TypeError(msg)
