"""Markdown renderer for layer-audit output."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from layer_audit.models.report import LayerReport, LayerSummary
from layer_audit.renderers.base import BaseRenderer, OutputFormat, RenderContext, human_size


class MarkdownRenderer(BaseRenderer):
    """Renderer for Markdown output format.

    Example:
        renderer = MarkdownRenderer()
        md_str = renderer.render(report, context)
    """

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.MARKDOWN

    def render(self, data: Any, context: RenderContext) -> str:
        if isinstance(data, LayerReport):
            return self._render_report(data, context)
        return self._render_generic(data)

    def _render_report(self, report: LayerReport, context: RenderContext) -> str:
        lines = [
            "# Layer Report",
            "",
            f"**Image:** `{report.image_name}`",
            f"**Generated:** {report.generated_at.isoformat()}",
            "",
            "## Summary",
            "",
            f"- Layers: {report.layer_count}",
            f"- Total Size: {human_size(report.total_size_bytes)} ({report.total_size_bytes} bytes)",
            f"- Average Size: {human_size(report.average_size_bytes)}",
            f"- Median Size: {human_size(report.median_size_bytes)}",
            f"- Tags: {report.total_tags} ({report.untagged_layer_count} untagged layers)",
            "",
        ]

        if report.top_layer_hierarchy:
            lines.extend(
                [
                    "## Layer Chain",
                    "",
                    f"`{report.top_layer_hierarchy}`",
                    "",
                    f"Cumulative size: {human_size(report.top_layer_cumulative_size)}",
                    "",
                ]
            )

        for title, layers in (
            ("Largest Layers", report.largest_layers),
            ("Smallest Layers", report.smallest_layers),
            ("Oldest Layers", report.oldest_layers),
            ("Newest Layers", report.newest_layers),
        ):
            if layers:
                lines.extend(self._layer_table(title, layers))

        lines.extend(["## Rankings", ""])
        lines.append(f"- Commands: {self._join(report.most_common_commands)}")
        lines.append(f"- Authors: {self._join(report.most_prolific_authors)}")
        lines.append(f"- Tags: {self._join(report.most_common_tags)}")
        lines.append("")

        if context.verbose and report.authors:
            lines.extend(
                [
                    "## Authors",
                    "",
                    "| Author | Layers | Size |",
                    "|--------|--------|------|",
                ]
            )
            for stats in report.authors:
                lines.append(
                    f"| {self._escape_md(stats.author)} | {stats.layer_count} | {human_size(stats.size_bytes)} |"
                )
            lines.append("")

        if context.verbose and report.size_distribution:
            lines.extend(["## Size Distribution", "", "| Size | Layers |", "|------|--------|"])
            for size, count in sorted(report.size_distribution.items()):
                lines.append(f"| {size} | {count} |")
            lines.append("")

        return "\n".join(lines)

    def _layer_table(self, title: str, layers: list[LayerSummary]) -> list[str]:
        lines = [
            f"## {title}",
            "",
            "| ID | Size | Command | Author | Created |",
            "|----|------|---------|--------|---------|",
        ]
        for layer in layers:
            lines.append(
                f"| `{layer.id}` | {human_size(layer.size_bytes)} | {self._escape_md(layer.command)} | "
                f"{self._escape_md(layer.author)} | {layer.created_at.isoformat()} |"
            )
        lines.append("")
        return lines

    def _render_generic(self, data: Any) -> str:
        if isinstance(data, BaseModel):
            dict_data = data.model_dump(mode="json")
        elif isinstance(data, dict):
            dict_data = data
        else:
            return str(data)

        lines = ["# Report", ""]
        for key, value in dict_data.items():
            lines.append(f"## {key.replace('_', ' ').title()}")
            lines.append("")
            lines.append(f"```\n{value}\n```")
            lines.append("")
        return "\n".join(lines)

    @staticmethod
    def _join(values: list[str]) -> str:
        return ", ".join(f"`{value}`" for value in values) if values else "-"

    @staticmethod
    def _escape_md(text: str) -> str:
        if not text:
            return text
        return text.replace("|", "\\|").replace("\n", " ")
