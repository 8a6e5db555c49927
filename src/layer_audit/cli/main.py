"""Main CLI entry point for layer-audit."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from layer_audit.cli import analyze, config, inspect, layer

app = typer.Typer(
    name="layer-audit",
    help="Analyze the layer history of container images.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.command(name="analyze")(analyze.analyze_cmd)
app.command(name="layer")(layer.layer_cmd)
app.command(name="inspect")(inspect.inspect_cmd)
app.add_typer(config.app, name="config")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (defaults to the usual search path)",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """
    layer-audit: analyze the layer history of container images.

    - [bold]analyze[/bold]: Summarize sizes, authors, commands and tags
    - [bold]layer[/bold]: Show one layer with its ancestry
    - [bold]inspect[/bold]: Print raw inspect data
    - [bold]config[/bold]: Show or create configuration
    """
    from layer_audit.utils.config import load_config, set_config
    from layer_audit.utils.errors import ConfigurationError
    from layer_audit.utils.logging import configure_logging

    if verbose:
        configure_logging(level="DEBUG")
    elif quiet:
        configure_logging(level="WARNING")
    else:
        configure_logging()

    try:
        set_config(load_config(config_file))
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show the layer-audit version."""
    from layer_audit import __version__

    console.print(f"layer-audit version {__version__}")


if __name__ == "__main__":
    app()
