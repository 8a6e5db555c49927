"""Base renderer protocol and types."""

from enum import Enum
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


class OutputFormat(str, Enum):
    """Supported output formats."""

    JSON = "json"
    MARKDOWN = "markdown"
    TERMINAL = "terminal"


class RenderContext(BaseModel):
    """Context for rendering operations."""

    model_config = {"frozen": True}

    format: OutputFormat = Field(default=OutputFormat.TERMINAL, description="Output format")
    output_path: Path | None = Field(default=None, description="Output file path")
    verbose: bool = Field(default=False, description="Include per-author and distribution tables")
    color: bool = Field(default=True, description="Enable color output (terminal only)")
    indent: int = Field(default=2, description="JSON indentation")


def human_size(size_bytes: int) -> str:
    """Format a byte count with a binary unit, e.g. ``1.5 MB``."""
    size = float(size_bytes)
    for unit in _SIZE_UNITS[:-1]:
        if abs(size) < 1024:
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} {_SIZE_UNITS[-1]}"


@runtime_checkable
class Renderer(Protocol):
    """Protocol for output renderers.

    Renderers turn a LayerReport (or any model) into human-readable or
    machine-readable output.
    """

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        ...

    def render(self, data: Any, context: RenderContext) -> str:
        """Render data to a string."""
        ...

    def render_to_file(self, data: Any, context: RenderContext) -> None:
        """Render data directly to ``context.output_path``.

        Raises:
            ValueError: If context.output_path is not set
        """
        ...


class BaseRenderer:
    """Base implementation providing render_to_file.

    Subclasses implement the format property and the render method.
    """

    def render_to_file(self, data: Any, context: RenderContext) -> None:
        if context.output_path is None:
            raise ValueError("output_path must be set in context for file rendering")

        content = self.render(data, context)
        context.output_path.write_text(content, encoding="utf-8")

    def render(self, data: Any, context: RenderContext) -> str:
        raise NotImplementedError
