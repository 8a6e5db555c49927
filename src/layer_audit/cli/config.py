"""CLI commands for managing layer-audit settings."""

from pathlib import Path
from typing import Optional

import typer
import yaml

from layer_audit.cli.utils import console, fail

app = typer.Typer(help="Show or create layer-audit configuration.", no_args_is_help=True)


@app.command("show")
def show_cmd() -> None:
    """Print the effective configuration as YAML."""
    from layer_audit.utils.config import get_config

    data = get_config().model_dump(mode="json")
    console.print(yaml.dump(data, default_flow_style=False, sort_keys=False), markup=False, highlight=False)


@app.command("init")
def init_cmd(
    path: Optional[Path] = typer.Option(
        None,
        "--path",
        "-p",
        help="Where to write the file (defaults to ~/.config/layer-audit/config.yaml)",
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a configuration file holding every default setting."""
    from layer_audit.utils.config import LayerAuditConfig, default_config_path, save_config

    target = path or default_config_path()
    if target.exists() and not force:
        fail(f"Config file already exists: {target} (use --force to overwrite)")

    written = save_config(LayerAuditConfig(), target, exclude_defaults=False)
    console.print(f"Config written to {written}")
