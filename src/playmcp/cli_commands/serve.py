"""``playmcp serve`` — serve a tool catalog over stdin/stdout."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from playmcp.cli_commands._output import LOG_LEVELS, configure_logging, err_console

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--tools",
    "tools_ref",
    default=None,
    envvar="PLAYMCP_TOOLS",
    help="Tool catalog as 'module:attribute' (a ToolRegistry or a factory).",
)
@click.option("--name", default=None, envvar="PLAYMCP_NAME", help="Server name for serverInfo.")
@click.option(
    "--server-version",
    default=None,
    envvar="PLAYMCP_SERVER_VERSION",
    help="Server version for serverInfo.",
)
@click.option(
    "--dispatch",
    type=click.Choice(["fifo", "concurrent"]),
    default="fifo",
    show_default=True,
    envvar="PLAYMCP_DISPATCH",
    help="fifo answers in input order; concurrent answers in completion order.",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="INFO",
    show_default=True,
    envvar="PLAYMCP_LOG_LEVEL",
    help="Log level for stderr diagnostics.",
)
@click.option("--telemetry", is_flag=True, envvar="PLAYMCP_TELEMETRY", help="Enable tracing.")
@click.option(
    "--otlp-endpoint",
    default=None,
    envvar="PLAYMCP_OTLP_ENDPOINT",
    help="Export spans via OTLP/gRPC instead of stderr.",
)
def serve(
    tools_ref: str | None,
    name: str | None,
    server_version: str | None,
    dispatch: str,
    log_level: str,
    telemetry: bool,
    otlp_endpoint: str | None,
) -> None:
    """Serve tools over line-delimited JSON-RPC on stdin/stdout."""
    from playmcp.config import ServerConfig, TelemetrySettings
    from playmcp.protocols.errors import ToolLoadError
    from playmcp.protocols.mcp.server import MCPServer
    from playmcp.tools.loader import load_tool_registry
    from playmcp.tools.registry import ToolRegistry

    configure_logging(log_level)

    try:
        registry = load_tool_registry(tools_ref) if tools_ref else ToolRegistry()
    except ToolLoadError as exc:
        err_console.print(f"[red]Tool catalog error:[/red] {exc}")
        sys.exit(1)

    overrides: dict[str, str] = {}
    if name:
        overrides["name"] = name
    if server_version:
        overrides["version"] = server_version
    config = ServerConfig(
        dispatch_mode=dispatch,  # type: ignore[arg-type]
        telemetry=TelemetrySettings(
            enabled=telemetry or bool(otlp_endpoint),
            otlp_endpoint=otlp_endpoint,
        ),
        **overrides,
    )

    if config.telemetry.enabled:
        from playmcp.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(
                service_name=config.name,
                export_to_console=config.telemetry.otlp_endpoint is None,
                otlp_endpoint=config.telemetry.otlp_endpoint,
            )
        except ImportError as exc:
            err_console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    server = MCPServer(config, registry.capabilities())
    registry.install(server)
    logger.info("Serving %d tool(s)", len(registry))

    try:
        asyncio.run(server.connect())
    except KeyboardInterrupt:
        logger.info("Interrupted")
