"""Resolve a ``module:attribute`` reference to a :class:`ToolRegistry`."""

from __future__ import annotations

import importlib

from playmcp.protocols.errors import ToolLoadError
from playmcp.tools.registry import ToolRegistry


def load_tool_registry(reference: str) -> ToolRegistry:
    """Import *reference* (``package.module:name``) and return its registry.

    ``name`` may be a :class:`ToolRegistry` or a zero-argument factory that
    returns one.
    """
    module_path, sep, attr = reference.partition(":")
    if not sep or not module_path or not attr:
        msg = f"Expected 'module:attribute', got {reference!r}"
        raise ToolLoadError(msg)

    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        msg = f"Cannot import tool module {module_path!r}: {exc}"
        raise ToolLoadError(msg) from exc

    try:
        target = getattr(module, attr)
    except AttributeError as exc:
        msg = f"Module {module_path!r} has no attribute {attr!r}"
        raise ToolLoadError(msg) from exc

    if callable(target) and not isinstance(target, ToolRegistry):
        target = target()
    if not isinstance(target, ToolRegistry):
        msg = f"{reference!r} is not a ToolRegistry (got {type(target).__name__})"
        raise ToolLoadError(msg)
    return target
