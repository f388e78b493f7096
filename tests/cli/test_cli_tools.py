"""Tests for ``playmcp tools list``."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from playmcp.cli import main
from playmcp.protocols.errors import ToolLoadError
from playmcp.tools.registry import ToolRegistry


def _registry() -> ToolRegistry:
    registry = ToolRegistry()
    registry.register(
        "navigate",
        AsyncMock(),
        description="Navigate to a URL",
        input_schema={"type": "object", "properties": {"url": {"type": "string"}}, "required": ["url"]},
    )
    return registry


class TestToolsList:
    def test_table(self) -> None:
        with patch("playmcp.tools.loader.load_tool_registry", return_value=_registry()):
            result = CliRunner().invoke(main, ["tools", "list", "--tools", "pkg:registry"])
        assert result.exit_code == 0
        assert "navigate" in result.output
        assert "Navigate to a URL" in result.output

    def test_json(self) -> None:
        with patch("playmcp.tools.loader.load_tool_registry", return_value=_registry()):
            result = CliRunner().invoke(main, ["tools", "list", "--tools", "pkg:registry", "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["tools"][0]["name"] == "navigate"
        assert payload["tools"][0]["inputSchema"]["required"] == ["url"]

    def test_empty_catalog(self) -> None:
        with patch("playmcp.tools.loader.load_tool_registry", return_value=ToolRegistry()):
            result = CliRunner().invoke(main, ["tools", "list", "--tools", "pkg:registry"])
        assert result.exit_code == 0
        assert "No tools registered" in result.output

    def test_load_error(self) -> None:
        with patch("playmcp.tools.loader.load_tool_registry", side_effect=ToolLoadError("nope")):
            result = CliRunner().invoke(main, ["tools", "list", "--tools", "bad:ref"])
        assert result.exit_code == 1

    def test_tools_option_required(self) -> None:
        result = CliRunner().invoke(main, ["tools", "list"])
        assert result.exit_code == 2
