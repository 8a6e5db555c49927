"""Unit tests for output renderers."""

import json
from pathlib import Path

import pytest
from rich.console import Console

from layer_audit.core.analyzer import LayerAnalyzer
from layer_audit.models.image import ImageRecord
from layer_audit.models.report import LayerReport
from layer_audit.renderers import (
    JSONRenderer,
    MarkdownRenderer,
    OutputFormat,
    RenderContext,
    Renderer,
    TerminalRenderer,
    get_renderer,
    human_size,
)


@pytest.fixture
def report(sample_image: ImageRecord) -> LayerReport:
    return LayerAnalyzer(top_n=2).analyze(sample_image).report


class TestHumanSize:
    """Tests for human_size."""

    @pytest.mark.parametrize(
        "size, expected",
        [
            (0, "0 B"),
            (512, "512 B"),
            (1024, "1.0 KB"),
            (1536, "1.5 KB"),
            (52428800, "50.0 MB"),
            (3 * 1024**4, "3.0 TB"),
        ],
    )
    def test_formats(self, size: int, expected: str):
        assert human_size(size) == expected


class TestGetRenderer:
    """Tests for get_renderer."""

    @pytest.mark.parametrize(
        "fmt, cls",
        [("json", JSONRenderer), ("markdown", MarkdownRenderer), ("terminal", TerminalRenderer)],
    )
    def test_by_name(self, fmt: str, cls: type):
        renderer = get_renderer(fmt)
        assert isinstance(renderer, cls)
        assert isinstance(renderer, Renderer)
        assert renderer.format == OutputFormat(fmt)

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            get_renderer("html")


class TestJSONRenderer:
    """Tests for JSONRenderer."""

    def test_renders_report(self, report: LayerReport):
        data = json.loads(JSONRenderer().render(report, RenderContext(format=OutputFormat.JSON)))

        assert data["image_name"] == "app:1.0"
        assert data["total_size_bytes"] == 1100
        assert [layer["id"] for layer in data["largest_layers"]] == ["base", "deps"]
        assert data["size_distribution"] == {"500": 1, "300": 2, "0": 2}

    def test_renders_list_of_models(self, sample_image: ImageRecord):
        output = JSONRenderer().render(sample_image.largest_n_layers(2), RenderContext(indent=0))
        data = json.loads(output)
        assert [layer["id"] for layer in data] == ["base", "deps"]
        assert data[0]["created_at"].startswith("2021-01-01T00:00:00")

    def test_render_to_file(self, report: LayerReport, tmp_path: Path):
        path = tmp_path / "report.json"
        JSONRenderer().render_to_file(report, RenderContext(output_path=path))
        assert json.loads(path.read_text())["layer_count"] == 5

    def test_render_to_file_requires_path(self, report: LayerReport):
        with pytest.raises(ValueError):
            JSONRenderer().render_to_file(report, RenderContext())


class TestMarkdownRenderer:
    """Tests for MarkdownRenderer."""

    def test_summary_and_tables(self, report: LayerReport):
        md = MarkdownRenderer().render(report, RenderContext(format=OutputFormat.MARKDOWN))

        assert md.startswith("# Layer Report")
        assert "**Image:** `app:1.0`" in md
        assert "- Layers: 5" in md
        assert "## Largest Layers" in md
        assert "| `base` | 500 B | ADD | root@x.com |" in md
        assert "`base -> deps -> app -> cfg -> cmd`" in md
        assert "## Authors" not in md

    def test_verbose_adds_author_table(self, report: LayerReport):
        md = MarkdownRenderer().render(report, RenderContext(verbose=True))
        assert "## Authors" in md
        assert "| dev@x.com | 3 | 600 B |" in md
        assert "## Size Distribution" in md

    def test_generic_model(self, sample_image: ImageRecord):
        md = MarkdownRenderer().render(sample_image.layers[0], RenderContext())
        assert md.startswith("# Report")
        assert "## Size Bytes" in md


class TestTerminalRenderer:
    """Tests for TerminalRenderer."""

    def test_prints_report(self, report: LayerReport):
        console = Console(record=True, width=120)
        result = TerminalRenderer(console).render(report, RenderContext())

        text = console.export_text()
        assert result == ""
        assert "Layer Report" in text
        assert "app:1.0" in text
        assert "Largest Layers" in text
        assert "Smallest Layers" not in text

    def test_verbose_prints_all_rankings(self, report: LayerReport):
        console = Console(record=True, width=120)
        TerminalRenderer(console).render(report, RenderContext(verbose=True))

        text = console.export_text()
        assert "Smallest Layers" in text
        assert "Authors" in text

    def test_render_to_file(self, report: LayerReport, tmp_path: Path):
        path = tmp_path / "report.txt"
        TerminalRenderer().render_to_file(report, RenderContext(output_path=path, color=False))
        assert "Layer Report" in path.read_text()
