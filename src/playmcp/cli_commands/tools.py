"""``playmcp tools`` — inspect a tool catalog without serving it."""

from __future__ import annotations

import json
import sys

import click

from playmcp.cli_commands._output import console, err_console, print_tools_table


@click.group()
def tools() -> None:
    """Inspect tool catalogs."""


@tools.command("list")
@click.option(
    "--tools",
    "tools_ref",
    required=True,
    envvar="PLAYMCP_TOOLS",
    help="Tool catalog as 'module:attribute'.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the tools/list payload as JSON.")
def list_tools(tools_ref: str, as_json: bool) -> None:
    """List the tools a catalog advertises."""
    from playmcp.protocols.errors import ToolLoadError
    from playmcp.tools.loader import load_tool_registry

    try:
        registry = load_tool_registry(tools_ref)
    except ToolLoadError as exc:
        err_console.print(f"[red]Tool catalog error:[/red] {exc}")
        sys.exit(1)

    descriptors = registry.descriptors()
    if as_json:
        payload = {"tools": [d.model_dump(by_alias=True) for d in descriptors]}
        console.print_json(json.dumps(payload))
        return

    if not descriptors:
        console.print("[yellow]No tools registered.[/yellow]")
        return

    print_tools_table(descriptors)
