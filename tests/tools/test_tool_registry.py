"""Tests for the tool catalog and its list/call handlers."""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from playmcp.protocols.errors import DuplicateToolError, ToolArgumentsError
from playmcp.protocols.mcp.models import CallToolResult, TextContent
from playmcp.protocols.mcp.registry import HandlerKind
from playmcp.protocols.mcp.server import MCPServer
from playmcp.tools.registry import ToolRegistry


class TestRegistration:
    def test_decorator_registers_in_order(self, tool_registry: ToolRegistry) -> None:
        assert list(tool_registry) == ["navigate", "moveMouse", "closeBrowser"]
        assert len(tool_registry) == 3
        assert "navigate" in tool_registry

    def test_decorator_defaults_from_function(self) -> None:
        registry = ToolRegistry()

        @registry.tool()
        async def get_page_title() -> str:
            """Get the title of the current page.

            Longer explanation.
            """
            return "Example"

        (definition,) = registry.descriptors()
        assert definition.name == "get_page_title"
        assert definition.description == "Get the title of the current page."
        assert definition.input_schema == {"type": "object", "properties": {}, "required": []}

    def test_duplicate_name_rejected(self) -> None:
        registry = ToolRegistry()
        registry.register("a", AsyncMock())
        with pytest.raises(DuplicateToolError, match="a"):
            registry.register("a", AsyncMock())

    def test_capabilities_keyed_by_name(self, tool_registry: ToolRegistry) -> None:
        caps = tool_registry.capabilities()
        assert list(caps.tools) == ["navigate", "moveMouse", "closeBrowser"]
        assert caps.tools["navigate"].description == "Navigate to a URL"


class TestListTools:
    async def test_lists_definitions(self, tool_registry: ToolRegistry) -> None:
        result = await tool_registry.list_tools()
        assert [t.name for t in result.tools] == ["navigate", "moveMouse", "closeBrowser"]
        dumped = result.model_dump(by_alias=True)
        assert dumped["tools"][0]["inputSchema"]["required"] == ["url"]


class TestCallTool:
    async def test_success(self, tool_registry: ToolRegistry) -> None:
        result = await tool_registry.call_tool("navigate", {"url": "https://example.com"})
        assert result == CallToolResult(content=[TextContent(text="Navigation successful")])

    async def test_unknown_tool(self, tool_registry: ToolRegistry) -> None:
        result = await tool_registry.call_tool("foo", {})
        assert result.is_error is True
        assert result.content[0].text == "Unknown tool: foo"

    async def test_invalid_arguments_raise(self, tool_registry: ToolRegistry) -> None:
        with pytest.raises(ToolArgumentsError, match="moveMouse") as exc_info:
            await tool_registry.call_tool("moveMouse", {"x": "left"})
        assert "y" in str(exc_info.value)
        assert exc_info.value.suggestion

    async def test_tool_error_with_suggestion(self, tool_registry: ToolRegistry) -> None:
        result = await tool_registry.call_tool("closeBrowser", {})
        assert result.is_error is True
        assert result.content[0].text == "Error: Browser not initialized\nSuggestion: Call openBrowser first"

    async def test_unexpected_exception_reported_as_content(self) -> None:
        registry = ToolRegistry()
        registry.register("boom", AsyncMock(side_effect=ValueError("bad state")))
        result = await registry.call_tool("boom", {})
        assert result == CallToolResult.from_text("Error: bad state", is_error=True)

    async def test_arguments_passed_as_keywords(self) -> None:
        func = AsyncMock(return_value="ok")
        registry = ToolRegistry()
        registry.register(
            "type",
            func,
            input_schema={
                "type": "object",
                "properties": {"selector": {"type": "string"}, "text": {"type": "string"}},
                "required": ["selector", "text"],
            },
        )
        await registry.call_tool("type", {"selector": "#q", "text": "hi", "ignored": 1})
        func.assert_awaited_once_with(selector="#q", text="hi")

    async def test_dict_result_validated(self) -> None:
        payload: dict[str, Any] = {"content": [{"type": "text", "text": "a"}], "isError": False}
        registry = ToolRegistry()
        registry.register("t", AsyncMock(return_value=payload))
        result = await registry.call_tool("t", {})
        assert result.is_error is False
        assert result.content[0].text == "a"

    async def test_non_text_blocks_pass_through(self) -> None:
        image = {"type": "image", "data": "aGk=", "mimeType": "image/png"}
        registry = ToolRegistry()
        registry.register("screenshot", AsyncMock(return_value={"content": [image]}))
        result = await registry.call_tool("screenshot", {})
        assert result.is_error is None
        assert result.model_dump(by_alias=True, exclude_none=True) == {"content": [image]}

    async def test_unsupported_result_type(self) -> None:
        registry = ToolRegistry()
        registry.register("t", AsyncMock(return_value=42))
        result = await registry.call_tool("t", {})
        assert result.is_error is True
        assert "unsupported result type" in result.content[0].text


class TestInstall:
    def test_install_registers_both_handlers(self, tool_registry: ToolRegistry) -> None:
        server = MCPServer(capabilities=tool_registry.capabilities())
        tool_registry.install(server)
        assert server.registry.get(HandlerKind.LIST_TOOLS) == tool_registry.list_tools
        assert server.registry.get(HandlerKind.CALL_TOOL) == tool_registry.call_tool
