"""CLI command for printing raw inspect data."""

import json
from pathlib import Path
from typing import Optional

import typer

from layer_audit.cli.utils import fail, write_output


def inspect_cmd(
    image: str = typer.Argument(..., help="Image name or reference"),
    inspect_file: Optional[Path] = typer.Option(
        None,
        "--inspect-file",
        help="Decode inspect JSON from a file instead of the Docker daemon",
        exists=True,
        dir_okay=False,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path",
    ),
) -> None:
    """
    Print the decoded inspect output of an image as JSON.

    Example:
        layer-audit inspect nginx:latest
    """
    from layer_audit.sources import DockerImageSource, decode_inspect_output
    from layer_audit.utils.config import get_config
    from layer_audit.utils.errors import InspectionFailure

    config = get_config()
    name = config.resolve_image(image)

    try:
        if inspect_file is not None:
            try:
                raw = inspect_file.read_bytes()
            except OSError as e:
                raise InspectionFailure(
                    f"Failed to read inspect file: {inspect_file}", reference=name, cause=e
                ) from e
            data = decode_inspect_output(raw, reference=name)
        else:
            source = DockerImageSource(base_url=config.docker.base_url, timeout=config.docker.timeout)
            data = source.inspect(name)
    except InspectionFailure as e:
        fail(e.message, [f"{key}: {value}" for key, value in e.details.items()])

    write_output(json.dumps(data, indent=2, default=str), output)
