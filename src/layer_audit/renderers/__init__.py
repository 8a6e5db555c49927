"""Output format renderers."""

from rich.console import Console

from layer_audit.renderers.base import BaseRenderer, OutputFormat, RenderContext, Renderer, human_size
from layer_audit.renderers.json import JSONRenderer
from layer_audit.renderers.markdown import MarkdownRenderer
from layer_audit.renderers.terminal import TerminalRenderer

__all__ = [
    "BaseRenderer",
    "OutputFormat",
    "RenderContext",
    "Renderer",
    "JSONRenderer",
    "MarkdownRenderer",
    "TerminalRenderer",
    "get_renderer",
    "human_size",
]


def get_renderer(format: OutputFormat | str, console: Console | None = None) -> BaseRenderer:
    """Get a renderer for the specified format.

    Args:
        format: Output format (OutputFormat enum or string)
        console: Console used by the terminal renderer

    Raises:
        ValueError: If format is not supported
    """
    if isinstance(format, str):
        format = OutputFormat(format)

    if format == OutputFormat.JSON:
        return JSONRenderer()
    if format == OutputFormat.MARKDOWN:
        return MarkdownRenderer()
    if format == OutputFormat.TERMINAL:
        return TerminalRenderer(console)
    raise ValueError(f"Unsupported format: {format}")
