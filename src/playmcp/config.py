"""Server configuration — identity, protocol version, dispatch ordering."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from playmcp.protocols.mcp.models import PROTOCOL_VERSION, ServerIdentity

DispatchMode = Literal["fifo", "concurrent"]


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class ServerConfig(BaseModel):
    """Configuration for an :class:`~playmcp.protocols.mcp.server.MCPServer`.

    ``dispatch_mode`` controls response ordering:

    * ``"fifo"`` — lines are processed one at a time through a single-consumer
      queue; responses come out in input order.
    * ``"concurrent"`` — every line is dispatched as soon as it is framed;
      responses come out in handler completion order and only the request id
      ties them back to their requests. Legacy ``command`` messages carry no
      id, so they cannot be paired safely in this mode.
    """

    name: str = "playmcp-browser"
    version: str = "1.0.0"
    protocol_version: str = PROTOCOL_VERSION
    dispatch_mode: DispatchMode = "fifo"
    default_suggestion: str = "Check input format"
    read_chunk_size: int = Field(default=65536, gt=0)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    @property
    def identity(self) -> ServerIdentity:
        return ServerIdentity(name=self.name, version=self.version)
