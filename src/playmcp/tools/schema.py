"""Input-schema validation — builds a pydantic model from a tool's ``inputSchema``.

Only the subset of JSON Schema that tool catalogs use is understood: a
top-level object with ``properties`` (each with a ``type`` and optional
``enum``) and a ``required`` list. Unknown property types accept any value.
"""

from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    create_model,
)

_TYPE_MAP: dict[str, Any] = {
    "string": StrictStr,
    "number": Union[StrictInt, StrictFloat],
    "integer": StrictInt,
    "boolean": StrictBool,
    "object": dict[str, Any],
    "array": list[Any],
    "null": None,
}


class ToolArguments(BaseModel):
    """Base for generated argument models; undeclared fields are dropped."""

    model_config = ConfigDict(extra="ignore")


def _field_type(spec: dict[str, Any]) -> Any:
    enum = spec.get("enum")
    if enum:
        return Literal[tuple(enum)]
    json_type = spec.get("type")
    if isinstance(json_type, list) and json_type:
        return Union[tuple(_TYPE_MAP.get(t, Any) for t in json_type)]
    return _TYPE_MAP.get(json_type, Any) if isinstance(json_type, str) else Any


def build_arguments_model(tool_name: str, input_schema: dict[str, Any]) -> type[ToolArguments]:
    """Create a :class:`ToolArguments` subclass mirroring *input_schema*."""
    properties: dict[str, Any] = input_schema.get("properties") or {}
    required = set(input_schema.get("required") or [])

    fields: dict[str, Any] = {}
    for name, spec in properties.items():
        field_type = _field_type(spec if isinstance(spec, dict) else {})
        if name in required:
            fields[name] = (field_type, ...)
        else:
            fields[name] = (Optional[field_type], None)

    model_name = "".join(part[:1].upper() + part[1:] for part in _split_name(tool_name))
    return create_model(f"{model_name}Arguments", __base__=ToolArguments, **fields)


def _split_name(name: str) -> list[str]:
    parts = [p for p in name.replace("-", "_").split("_") if p]
    return parts or ["tool"]
