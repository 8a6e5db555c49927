"""CLI command for analyzing an image's layers."""

from pathlib import Path
from typing import Optional

import typer

from layer_audit.cli.utils import check_report, console, fail, load_image, write_output


def analyze_cmd(
    image: str = typer.Argument(..., help="Image name or reference"),
    history_file: Optional[Path] = typer.Option(
        None,
        "--history-file",
        "-H",
        help="Read history lines from a file instead of the Docker daemon",
        exists=True,
        dir_okay=False,
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        "-n",
        min=0,
        help="Entries per ranking (defaults to analysis.top_n from the config)",
    ),
    format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (terminal, json, markdown)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path",
    ),
    detailed: bool = typer.Option(
        False,
        "--detailed",
        "-d",
        help="Include every ranking plus author and size tables",
    ),
) -> None:
    """
    Summarize the layers of an image.

    Reports total, average and median sizes, the largest, smallest, oldest
    and newest layers, and the most common commands, authors and tags.

    Example:
        layer-audit analyze nginx:latest --top 3
        layer-audit analyze app --history-file history.txt -f json
    """
    from layer_audit.core.analyzer import LayerAnalyzer
    from layer_audit.renderers import OutputFormat, RenderContext, get_renderer
    from layer_audit.utils.config import get_config

    config = get_config()
    try:
        output_format = OutputFormat(format or config.output.default_format)
    except ValueError:
        fail(f"Invalid format: {format or config.output.default_format}")

    record = load_image(image, history_file, with_inspect=False)

    with console.status("Analyzing layers..."):
        analyzer = LayerAnalyzer(
            top_n=config.analysis.top_n if top is None else top,
            separator=config.analysis.hierarchy_separator,
        )
        result = analyzer.analyze(record)

    if not result.success:
        fail("Failed to analyze image", [str(error) for error in result.errors])

    report = result.report
    check_report(report)

    context = RenderContext(
        format=output_format,
        output_path=output,
        verbose=detailed or config.output.verbose,
        color=config.output.color,
    )
    renderer = get_renderer(output_format, console)

    if output_format == OutputFormat.TERMINAL:
        if output:
            renderer.render_to_file(report, context)
            console.print(f"Report written to {output}")
        else:
            renderer.render(report, context)
        return

    write_output(renderer.render(report, context), output)
