"""Unit tests for the config module."""

from pathlib import Path

import pytest

from layer_audit.utils.config import (
    AnalysisConfig,
    DockerConfig,
    LayerAuditConfig,
    OutputConfig,
    default_config_path,
    get_config,
    get_config_paths,
    get_default_config,
    load_config,
    save_config,
    set_config,
)
from layer_audit.utils.errors import ConfigurationError


class TestConfigModels:
    """Tests for the configuration models."""

    def test_defaults(self):
        config = LayerAuditConfig()
        assert config.analysis == AnalysisConfig(top_n=5, hierarchy_separator=" -> ")
        assert config.docker == DockerConfig(base_url=None, timeout=60)
        assert config.output == OutputConfig(default_format="terminal", color=True, verbose=False)
        assert config.aliases == {}

    def test_resolve_image(self):
        config = LayerAuditConfig(aliases={"web": "nginx:1.25"})
        assert config.resolve_image("web") == "nginx:1.25"
        assert config.resolve_image("redis") == "redis"

    def test_get_default_config(self):
        assert get_default_config() == LayerAuditConfig()


class TestLoadConfig:
    """Tests for loading configuration files."""

    def test_no_files_gives_defaults(self):
        assert load_config() == LayerAuditConfig()

    def test_explicit_path(self, tmp_path: Path):
        path = tmp_path / "custom.yaml"
        path.write_text("analysis:\n  top_n: 3\naliases:\n  web: nginx:1.25\n")

        config = load_config(path)
        assert config.analysis.top_n == 3
        assert config.analysis.hierarchy_separator == " -> "
        assert config.aliases == {"web": "nginx:1.25"}

    def test_explicit_path_missing(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.yaml")

    def test_searches_current_directory(self, tmp_path: Path):
        (tmp_path / ".layer-audit.yaml").write_text("docker:\n  timeout: 5\n")
        assert load_config().docker.timeout == 5

    def test_searches_home_config_dir(self):
        path = default_config_path()
        path.parent.mkdir(parents=True)
        path.write_text("output:\n  default_format: json\n")
        assert load_config().output.default_format == "json"

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == LayerAuditConfig()

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("analysis: [unclosed\n")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_invalid_value_names_key(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("analysis:\n  top_n: -2\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)
        assert exc_info.value.details["config_key"] == "analysis.top_n"

    def test_non_mapping(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_xdg_config_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        xdg = tmp_path / "xdg"
        monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
        assert xdg / "layer-audit" / "config.yaml" in get_config_paths()


class TestSaveConfig:
    """Tests for saving configuration files."""

    def test_save_only_changes(self, tmp_path: Path):
        path = tmp_path / "out" / "config.yaml"
        config = LayerAuditConfig(analysis=AnalysisConfig(top_n=9))

        written = save_config(config, path)
        assert written == path
        assert "top_n: 9" in path.read_text()
        assert "docker" not in path.read_text()
        assert load_config(path) == config

    def test_save_full(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        save_config(LayerAuditConfig(), path, exclude_defaults=False)
        text = path.read_text()
        assert "timeout: 60" in text
        assert "default_format: terminal" in text

    def test_default_location(self):
        written = save_config(LayerAuditConfig())
        assert written == default_config_path()
        assert written.exists()


class TestGlobalConfig:
    """Tests for the global config instance."""

    def test_set_and_get(self):
        config = LayerAuditConfig(analysis=AnalysisConfig(top_n=1))
        set_config(config)
        assert get_config() is config

    def test_lazy_load(self, tmp_path: Path):
        (tmp_path / "layer-audit.yaml").write_text("analysis:\n  top_n: 2\n")
        assert get_config().analysis.top_n == 2
