"""Shared fixtures: an in-memory transport and a small tool catalog."""

from __future__ import annotations

import asyncio
import io
import json
from collections.abc import Awaitable, Callable
from typing import Any

import pytest

from playmcp.protocols.errors import ToolError
from playmcp.protocols.mcp.server import MCPServer
from playmcp.protocols.mcp.transport import StreamTransport
from playmcp.tools.registry import ToolRegistry

ServeFn = Callable[..., Awaitable[list[dict[str, Any]]]]


async def _serve(server: MCPServer, lines: list[str], *, raw: str | None = None) -> list[dict[str, Any]]:
    """Feed *lines* (or *raw* text) to *server*, run to EOF, return parsed output lines."""
    reader = asyncio.StreamReader()
    data = raw if raw is not None else "".join(line + "\n" for line in lines)
    reader.feed_data(data.encode())
    reader.feed_eof()
    output = io.StringIO()
    await server.connect(StreamTransport(reader, output))
    return [json.loads(line) for line in output.getvalue().splitlines()]


@pytest.fixture
def serve() -> ServeFn:
    return _serve


def make_tool_registry() -> ToolRegistry:
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
        return "Navigation successful"

    @registry.tool(
        "moveMouse",
        description="Move mouse to coordinates",
        input_schema={
            "type": "object",
            "properties": {"x": {"type": "number"}, "y": {"type": "number"}},
            "required": ["x", "y"],
        },
    )
    async def move_mouse(x: float, y: float) -> str:
        return f"Mouse moved to {x},{y}"

    @registry.tool("closeBrowser", description="Close the browser")
    async def close_browser() -> str:
        raise ToolError("Browser not initialized", "Call openBrowser first")

    return registry


@pytest.fixture
def tool_registry() -> ToolRegistry:
    return make_tool_registry()
