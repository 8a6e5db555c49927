"""Integration tests for end-to-end workflows."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest
from typer.testing import CliRunner

from layer_audit import LayerAnalyzer, build_image
from layer_audit.cli.main import app
from layer_audit.core import analysis
from layer_audit.renderers import JSONRenderer, MarkdownRenderer, OutputFormat, RenderContext
from layer_audit.sources import FileImageSource, load_image
from layer_audit.utils.errors import InvalidTimestampError

EXAMPLE_LINES = [
    "L1 100 RUN a@x.com 2021-01-01T00:00:00Z t1,t2 build1",
    "L2 50 COPY b@x.com 2021-02-01T00:00:00Z  build2",
]


class TestExampleWorkflow:
    """The two-layer history from the reference example."""

    def test_build_and_query(self):
        image = build_image("example", EXAMPLE_LINES)

        assert image.total_size_bytes == 150
        assert set(image.unique_authors()) == {"a@x.com", "b@x.com"}
        assert [layer.id for layer in image.largest_n_layers(1)] == ["L1"]

        second = image.layers[1]
        assert second.parent_index == 0
        assert second.tags == ("",)
        assert second.created_by == "build2"
        assert image.hierarchy(second) == "L1 -> L2"
        assert image.cumulative_size(second) == 150

    def test_time_range_excludes_bounds(self):
        image = build_image("example", EXAMPLE_LINES)
        start = datetime(2021, 1, 1, tzinfo=timezone.utc)
        end = datetime(2021, 2, 1, tzinfo=timezone.utc)

        assert image.layers_in_time_range(start, end) == []
        assert image.layers_in_time_range(start, datetime(2021, 3, 1, tzinfo=timezone.utc))[0].id == "L2"

    def test_analyze_and_render(self):
        """Test building, analyzing and rendering the example image."""
        report = LayerAnalyzer(top_n=1).analyze(build_image("example", EXAMPLE_LINES)).report

        data = json.loads(JSONRenderer().render(report, RenderContext(format=OutputFormat.JSON)))
        assert data["total_size_bytes"] == 150
        assert data["average_size_bytes"] == 75
        assert data["median_size_bytes"] == 75
        assert data["largest_layers"][0]["id"] == "L1"
        assert data["most_common_tags"] == ["t1"]

        md = MarkdownRenderer().render(report, RenderContext(format=OutputFormat.MARKDOWN))
        assert "`L1 -> L2`" in md


class TestFileWorkflow:
    """Captured history and inspect files through every layer of the stack."""

    def test_file_source_to_report(self, history_file: Path, inspect_file: Path):
        image = load_image("app:1.0", FileImageSource(history_file, inspect_file))
        result = LayerAnalyzer(top_n=3).analyze(image)

        assert result.success
        assert result.report.total_size_bytes == 1100
        assert image.inspect_data[0]["Id"] == "sha256:abc"
        assert analysis.layers_without_tags(image.layers)[0].id == "cfg"

    def test_bad_line_stops_build(self, tmp_path: Path):
        """Test that no partial image is returned when a line is invalid."""
        path = tmp_path / "history.txt"
        path.write_text(EXAMPLE_LINES[0] + "\nL2 50 COPY b@x.com yesterday  build2\n")

        with pytest.raises(InvalidTimestampError) as exc_info:
            load_image("example", FileImageSource(path))

        assert exc_info.value.line_number == 2

    def test_cli_round_trip(self, tmp_path: Path):
        """Test writing a config, then analyzing through the CLI."""
        history = tmp_path / "history.txt"
        history.write_text("\n".join(EXAMPLE_LINES) + "\n")
        config = tmp_path / "layer-audit.yaml"

        runner = CliRunner()
        assert runner.invoke(app, ["config", "init", "--path", str(config)]).exit_code == 0

        result = runner.invoke(
            app, ["-q", "--config", str(config), "analyze", "example", "-H", str(history), "-f", "json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["unique_authors"] == ["a@x.com", "b@x.com"]
        assert data["top_layer_hierarchy"] == "L1 -> L2"
