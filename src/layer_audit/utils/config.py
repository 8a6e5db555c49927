"""Configuration file support for layer-audit."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from layer_audit.utils.errors import ConfigurationError
from layer_audit.utils.logging import get_logger

logger = get_logger(__name__)

CONFIG_DIR_NAME = "layer-audit"


class AnalysisConfig(BaseModel):
    """Defaults for the layer analyzer."""

    top_n: int = Field(default=5, ge=0, description="Entries shown in each ranking")
    hierarchy_separator: str = Field(default=" -> ", description="Separator between layer ids")


class DockerConfig(BaseModel):
    """Docker daemon connection settings."""

    base_url: str | None = Field(default=None, description="Daemon URL, defaults to the environment")
    timeout: int = Field(default=60, gt=0, description="API timeout in seconds")


class OutputConfig(BaseModel):
    """Output configuration."""

    default_format: str = Field(default="terminal", description="Default output format")
    color: bool = Field(default=True, description="Enable color output")
    verbose: bool = Field(default=False, description="Verbose output")


class LayerAuditConfig(BaseModel):
    """Main configuration for layer-audit."""

    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    docker: DockerConfig = Field(default_factory=DockerConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    aliases: dict[str, str] = Field(
        default_factory=dict, description="Image name aliases"
    )

    def resolve_image(self, name: str) -> str:
        """Expand an alias to its image name."""
        return self.aliases.get(name, name)


def get_config_paths() -> list[Path]:
    """Get possible configuration file paths, in lookup order."""
    cwd = Path.cwd()
    home = Path.home()
    paths = [
        cwd / ".layer-audit.yaml",
        cwd / ".layer-audit.yml",
        cwd / "layer-audit.yaml",
        home / ".layer-audit.yaml",
        default_config_path(),
    ]

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(Path(xdg_config) / CONFIG_DIR_NAME / "config.yaml")

    return paths


def load_config(config_path: Path | str | None = None) -> LayerAuditConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file. If None, searches default locations.

    Returns:
        Loaded configuration

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            return _load_config_file(path)
        raise FileNotFoundError(f"Config file not found: {config_path}")

    for path in get_config_paths():
        if path.exists():
            return _load_config_file(path)

    return LayerAuditConfig()


def _load_config_file(path: Path) -> LayerAuditConfig:
    logger.debug("Loading config from %s", path)
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}") from e

    if data is None:
        return LayerAuditConfig()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    try:
        return LayerAuditConfig.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"])
        raise ConfigurationError(f"Invalid config value for '{key}': {first['msg']}", config_key=key) from e


def default_config_path() -> Path:
    """Path used by save_config when none is given."""
    return Path.home() / ".config" / CONFIG_DIR_NAME / "config.yaml"


def save_config(
    config: LayerAuditConfig,
    config_path: Path | str | None = None,
    exclude_defaults: bool = True,
) -> Path:
    """Save configuration to file.

    Args:
        config: Configuration to save
        config_path: Path to save to. Defaults to ~/.config/layer-audit/config.yaml
        exclude_defaults: Only write settings that differ from the defaults

    Returns:
        Path where config was saved
    """
    if config_path is None:
        config_path = default_config_path()
    else:
        config_path = Path(config_path)

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_defaults=exclude_defaults)
    config_path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))

    return config_path


def get_default_config() -> LayerAuditConfig:
    """Get the default configuration."""
    return LayerAuditConfig()


_config: LayerAuditConfig | None = None


def get_config() -> LayerAuditConfig:
    """Get the global configuration instance, loading it on first call."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: LayerAuditConfig | None) -> None:
    """Replace the global configuration instance (None forces a reload)."""
    global _config
    _config = config
