"""Tests for server configuration."""

import pytest
from pydantic import ValidationError

from playmcp.config import ServerConfig, TelemetrySettings


class TestServerConfig:
    def test_defaults(self) -> None:
        config = ServerConfig()
        assert config.name == "playmcp-browser"
        assert config.version == "1.0.0"
        assert config.protocol_version == "2024-11-05"
        assert config.dispatch_mode == "fifo"
        assert config.default_suggestion == "Check input format"
        assert config.telemetry == TelemetrySettings()

    def test_identity(self) -> None:
        identity = ServerConfig(name="srv", version="2.1.0").identity
        assert identity.name == "srv"
        assert identity.version == "2.1.0"

    def test_rejects_unknown_dispatch_mode(self) -> None:
        with pytest.raises(ValidationError):
            ServerConfig(dispatch_mode="parallel")  # type: ignore[arg-type]

    def test_rejects_non_positive_chunk_size(self) -> None:
        with pytest.raises(ValidationError):
            ServerConfig(read_chunk_size=0)
