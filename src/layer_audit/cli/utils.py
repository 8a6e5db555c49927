"""Shared utilities for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, NoReturn

import typer
from rich.console import Console

from layer_audit.utils.config import get_config
from layer_audit.utils.errors import LayerAuditError

if TYPE_CHECKING:
    from layer_audit.models.image import ImageRecord
    from layer_audit.sources.base import ImageSource

console = Console()
err_console = Console(stderr=True)


def fail(message: str, details: list[str] | None = None) -> NoReturn:
    """Print an error and exit with status 1."""
    err_console.print(f"[red]Error:[/red] {message}")
    for detail in details or []:
        err_console.print(f"  {detail}")
    raise typer.Exit(1)


def build_source(history_file: Path | None, inspect_file: Path | None) -> "ImageSource":
    """Pick the file source when a history file is given, Docker otherwise."""
    from layer_audit.sources import DockerImageSource, FileImageSource

    if history_file is not None:
        return FileImageSource(history_file, inspect_file)

    docker_config = get_config().docker
    return DockerImageSource(base_url=docker_config.base_url, timeout=docker_config.timeout)


def load_image(
    image: str,
    history_file: Path | None = None,
    inspect_file: Path | None = None,
    with_inspect: bool = True,
) -> "ImageRecord":
    """Load an image for a CLI command, exiting on failure.

    Args:
        image: Image name or configured alias
        history_file: Pre-captured history lines instead of the Docker daemon
        inspect_file: Pre-captured inspect JSON (used with history_file)
        with_inspect: Attach inspect data to the record
    """
    from layer_audit.sources import load_image as load_from_source

    name = get_config().resolve_image(image)
    source = build_source(history_file, inspect_file)
    with console.status(f"Loading {name}..."):
        try:
            return load_from_source(name, source, with_inspect=with_inspect)
        except LayerAuditError as e:
            fail(e.message, [f"{key}: {value}" for key, value in e.details.items() if key != "line"])


def write_output(content: str, output: Path | None) -> None:
    """Write rendered content to a file or the console."""
    if output:
        output.write_text(content, encoding="utf-8")
        console.print(f"Report written to {output}")
    else:
        console.print(content, markup=False, highlight=False, soft_wrap=True)


def check_report(report: Any | None, error_message: str = "No report generated") -> None:
    """Exit if a report was not generated."""
    if report is None:
        fail(error_message)
