"""ResponseWriter — serializes one envelope per line onto a transport."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from playmcp.protocols.errors import INTERNAL_ERROR
from playmcp.protocols.mcp.models import (
    JsonRpcError,
    JsonRpcErrorResponse,
    LegacyResponse,
    RequestId,
)

if TYPE_CHECKING:
    from playmcp.protocols.mcp.transport import ServerTransport

DEFAULT_SUGGESTION = "Check input format"


def to_payload(value: BaseModel | dict[str, Any]) -> dict[str, Any]:
    """Dump a model the way it goes on the wire; plain dicts pass through unchanged."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    return value


class ResponseWriter:
    """Writes JSON-RPC and legacy envelopes, one compact JSON object per line.

    Writes are independent of each other: no batching, no backpressure.
    """

    def __init__(self, transport: ServerTransport) -> None:
        self._transport = transport

    def write(self, payload: BaseModel | dict[str, Any]) -> None:
        line = json.dumps(to_payload(payload), ensure_ascii=False, separators=(",", ":"))
        self._transport.write(line + "\n")

    def result(self, request_id: RequestId, result: BaseModel | dict[str, Any]) -> None:
        """Write a success envelope echoing *request_id*."""
        self.write({"jsonrpc": "2.0", "id": request_id, "result": to_payload(result)})

    def error(
        self,
        request_id: RequestId | None,
        message: str,
        *,
        code: int = INTERNAL_ERROR,
        suggestion: str | None = DEFAULT_SUGGESTION,
    ) -> None:
        """Write an error envelope; ``id`` is always present, possibly null."""
        envelope = JsonRpcErrorResponse(
            id=request_id,
            error=JsonRpcError(
                code=code,
                message=message,
                data={"suggestion": suggestion} if suggestion else None,
            ),
        )
        payload = envelope.model_dump(mode="json", exclude_none=True)
        payload["id"] = request_id
        self.write(payload)

    def legacy(self, response: LegacyResponse) -> None:
        self.write(response)
