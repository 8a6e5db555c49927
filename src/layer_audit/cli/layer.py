"""CLI command for showing a single layer and its ancestry."""

from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel
from rich.table import Table

from layer_audit.cli.utils import console, fail, load_image
from layer_audit.renderers.base import human_size


def layer_cmd(
    image: str = typer.Argument(..., help="Image name or reference"),
    layer_id: str = typer.Argument(..., help="Layer id as shown in the history"),
    history_file: Optional[Path] = typer.Option(
        None,
        "--history-file",
        "-H",
        help="Read history lines from a file instead of the Docker daemon",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """
    Show one layer, its parent chain and cumulative size.

    Example:
        layer-audit layer app:latest 3f2a9c1d0e4b --history-file history.txt
    """
    from layer_audit.utils.config import get_config

    record = load_image(image, history_file, with_inspect=False)

    # ids like <missing> repeat; the newest match is the one users mean
    matches = [layer for layer in record.layers if layer.id == layer_id]
    if not matches:
        fail(f"Layer not found: {layer_id}")
    layer = matches[-1]

    separator = get_config().analysis.hierarchy_separator
    parent = record.parent_of(layer)

    console.print(
        Panel(
            f"[bold]ID:[/bold] {layer.id}\n"
            f"[bold]Size:[/bold] {human_size(layer.size_bytes)} ({layer.size_bytes} bytes)\n"
            f"[bold]Command:[/bold] {layer.command}\n"
            f"[bold]Author:[/bold] {layer.author}\n"
            f"[bold]Created:[/bold] {layer.created_at.isoformat()}\n"
            f"[bold]Created By:[/bold] {layer.created_by}\n"
            f"[bold]Tags:[/bold] {', '.join(tag for tag in layer.tags if tag) or '-'}\n"
            f"[bold]Parent:[/bold] {parent.id if parent else '-'}",
            title=f"Layer {layer.index + 1} of {record.layer_count}",
        )
    )

    table = Table(title="Ancestry")
    table.add_column("ID", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Cumulative", justify="right")
    for ancestor in [layer, *layer.ancestors(record.layers)]:
        table.add_row(
            ancestor.id,
            human_size(ancestor.size_bytes),
            human_size(ancestor.cumulative_size(record.layers)),
        )
    console.print(table)
    console.print(f"[bold]Chain:[/bold] {record.hierarchy(layer, separator)}", markup=True, highlight=False)
