"""Image source reading pre-captured history and inspect files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from layer_audit.sources.base import decode_inspect_output
from layer_audit.utils.errors import InspectionFailure


class FileImageSource:
    """Serves history lines and inspect data saved to disk.

    The history file holds one history line per layer, oldest first. The
    inspect file, if given, holds the JSON printed by ``docker inspect``.
    The ``name`` argument of each method is ignored; one source describes
    one image.
    """

    def __init__(self, history_path: Path | str, inspect_path: Path | str | None = None) -> None:
        self._history_path = Path(history_path)
        self._inspect_path = Path(inspect_path) if inspect_path is not None else None

    def history_lines(self, name: str) -> list[str]:
        try:
            text = self._history_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InspectionFailure(
                f"Failed to read history file: {self._history_path}",
                reference=name,
                cause=e,
            ) from e
        return text.splitlines()

    def inspect(self, name: str) -> list[dict[str, Any]]:
        if self._inspect_path is None:
            return []
        try:
            raw = self._inspect_path.read_bytes()
        except OSError as e:
            raise InspectionFailure(
                f"Failed to read inspect file: {self._inspect_path}",
                reference=name,
                cause=e,
            ) from e
        return decode_inspect_output(raw, reference=name)
