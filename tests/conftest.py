"""Shared test fixtures for layer-audit tests."""

from pathlib import Path

import pytest

from layer_audit.core.builder import build_image
from layer_audit.models.image import ImageRecord
from layer_audit.models.layer import LayerRecord
from layer_audit.utils.config import set_config

# Oldest layer first; "cfg" has an empty tag column.
HISTORY_LINES = [
    "base 500 ADD root@x.com 2021-01-01T00:00:00Z base,os /bin/sh -c #(nop) ADD file:abc in /",
    "deps 300 RUN dev@x.com 2021-01-02T00:00:00Z deps apt-get install -y curl",
    "app 300 COPY dev@x.com 2021-01-03T00:00:00Z app,latest COPY . /app",
    "cfg 0 ENV ops@x.com 2021-01-04T00:00:00Z  ENV PORT=8080",
    'cmd 0 CMD dev@x.com 2021-01-05T00:00:00Z latest CMD ["python"]',
]

EXAMPLE_LINES = [
    "L1 100 RUN a@x.com 2021-01-01T00:00:00Z t1,t2 build1",
    "L2 50 COPY b@x.com 2021-02-01T00:00:00Z  build2",
]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep user config files and the global config out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("LAYER_AUDIT_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def history_lines() -> list[str]:
    return list(HISTORY_LINES)


@pytest.fixture
def sample_image() -> ImageRecord:
    """Five-layer image built from HISTORY_LINES."""
    return build_image("app:1.0", HISTORY_LINES)


@pytest.fixture
def sample_layers(sample_image: ImageRecord) -> list[LayerRecord]:
    return list(sample_image.layers)


@pytest.fixture
def example_image() -> ImageRecord:
    """The two-layer image from the end-to-end example."""
    return build_image("example", EXAMPLE_LINES)


@pytest.fixture
def history_file(tmp_path: Path) -> Path:
    path = tmp_path / "history.txt"
    path.write_text("\n".join(HISTORY_LINES) + "\n")
    return path


@pytest.fixture
def inspect_file(tmp_path: Path) -> Path:
    path = tmp_path / "inspect.json"
    path.write_text('[{"Id": "sha256:abc", "Author": "root@x.com", "Os": "linux"}]')
    return path
