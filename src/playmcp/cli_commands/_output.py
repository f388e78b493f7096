"""Shared CLI output helpers.

``serve`` owns stdout for protocol lines, so everything it prints for humans
goes through ``err_console`` (stderr).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

if TYPE_CHECKING:
    from playmcp.protocols.mcp.models import MCPToolDef

console = Console()
err_console = Console(stderr=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def configure_logging(level: str) -> None:
    """Send ``playmcp`` logs to stderr through rich."""
    handler = RichHandler(console=err_console, show_path=False, rich_tracebacks=True)
    root = logging.getLogger("playmcp")
    root.handlers[:] = [handler]
    root.setLevel(level.upper())
    root.propagate = False


def print_tools_table(tools: list[MCPToolDef]) -> None:
    """Pretty-print a tool catalog as a table."""
    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Required")

    for tool in tools:
        required = tool.input_schema.get("required") or []
        table.add_row(tool.name, _truncate(tool.description), ", ".join(required) or "-")

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
