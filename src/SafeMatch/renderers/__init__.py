"""Output renderers for SafeMatch commands."""

from __future__ import annotations

from SafeMatch.renderers.base import Renderer
from SafeMatch.renderers.console import ConsoleRenderer
from SafeMatch.renderers.json import JsonRenderer

OUTPUT_FORMATS = ("text", "json")


def create_renderer(output_format: str) -> Renderer:
    """Create the renderer for an output format name.

    Args:
        output_format: One of ``OUTPUT_FORMATS``.

    Returns:
        Renderer instance.

    Raises:
        ValueError: If the format is unknown.
    """
    if output_format == "text":
        return ConsoleRenderer()
    if output_format == "json":
        return JsonRenderer()
    raise ValueError(f"Unsupported output format: {output_format}")


__all__ = [
    "OUTPUT_FORMATS",
    "Renderer",
    "ConsoleRenderer",
    "JsonRenderer",
    "create_renderer",
]
