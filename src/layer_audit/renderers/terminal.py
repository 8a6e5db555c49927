"""Terminal renderer for layer-audit output."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from layer_audit.models.report import LayerReport, LayerSummary
from layer_audit.renderers.base import BaseRenderer, OutputFormat, RenderContext, human_size


class TerminalRenderer(BaseRenderer):
    """Renderer for rich terminal output.

    ``render`` prints to the console and returns an empty string; use
    ``Console(record=True)`` to capture the output.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.TERMINAL

    def render(self, data: Any, context: RenderContext) -> str:
        if isinstance(data, LayerReport):
            self._render_report(data, context)
        else:
            self._render_generic(data)
        return ""

    def render_to_file(self, data: Any, context: RenderContext) -> None:
        """Capture the terminal output and write it to ``context.output_path``."""
        if context.output_path is None:
            raise ValueError("output_path must be set in context for file rendering")

        file_console = Console(record=True, force_terminal=context.color, width=120)
        original_console = self._console
        self._console = file_console
        try:
            self.render(data, context)
            context.output_path.write_text(file_console.export_text(styles=context.color))
        finally:
            self._console = original_console

    def _render_report(self, report: LayerReport, context: RenderContext) -> None:
        self._console.print()
        self._console.print(
            Panel(
                f"[bold]Image:[/bold] {report.image_name}\n"
                f"[bold]Layers:[/bold] {report.layer_count}\n"
                f"[bold]Total Size:[/bold] {human_size(report.total_size_bytes)}",
                title="Layer Report",
            )
        )

        if report.is_empty:
            self._console.print("[yellow]Image has no layers[/yellow]")
            return

        table = Table(title="Summary", show_header=False)
        table.add_column("Metric", style="bold")
        table.add_column("Value")
        table.add_row("Average Size", human_size(report.average_size_bytes))
        table.add_row("Median Size", human_size(report.median_size_bytes))
        table.add_row("Tags", str(report.total_tags))
        table.add_row("Untagged Layers", str(report.untagged_layer_count))
        table.add_row("Authors", str(len(report.unique_authors)))
        table.add_row("Commands", ", ".join(report.most_common_commands) or "-")
        self._console.print(table)

        if report.top_layer_hierarchy:
            self._console.print()
            self._console.print(f"[bold]Chain:[/bold] [dim]{report.top_layer_hierarchy}[/dim]")

        self._print_layers("Largest Layers", report.largest_layers)
        if context.verbose:
            self._print_layers("Smallest Layers", report.smallest_layers)
            self._print_layers("Newest Layers", report.newest_layers)
            self._print_layers("Oldest Layers", report.oldest_layers)
            self._print_authors(report)

    def _print_layers(self, title: str, layers: list[LayerSummary]) -> None:
        if not layers:
            return
        self._console.print()
        table = Table(title=title)
        table.add_column("ID", style="cyan")
        table.add_column("Size", justify="right")
        table.add_column("Command")
        table.add_column("Author", style="dim")
        table.add_column("Created")
        for layer in layers:
            table.add_row(
                layer.id,
                human_size(layer.size_bytes),
                layer.command,
                layer.author,
                layer.created_at.strftime("%Y-%m-%d %H:%M"),
            )
        self._console.print(table)

    def _print_authors(self, report: LayerReport) -> None:
        if not report.authors:
            return
        self._console.print()
        table = Table(title="Authors")
        table.add_column("Author", style="bold")
        table.add_column("Layers", justify="right")
        table.add_column("Size", justify="right")
        for stats in sorted(report.authors, key=lambda s: s.size_bytes, reverse=True):
            table.add_row(stats.author, str(stats.layer_count), human_size(stats.size_bytes))
        self._console.print(table)

    def _render_generic(self, data: Any) -> None:
        if isinstance(data, BaseModel):
            self._console.print(json.dumps(data.model_dump(mode="json"), indent=2, default=str))
        elif isinstance(data, dict):
            self._console.print(json.dumps(data, indent=2, default=str))
        else:
            self._console.print(str(data))
