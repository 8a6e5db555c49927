"""Image source protocol and inspect-output decoding."""

from __future__ import annotations

import json
from typing import Any, Protocol, runtime_checkable

from layer_audit.utils.errors import InspectionFailure


@runtime_checkable
class ImageSource(Protocol):
    """Protocol for collaborators that know how to read an image's history.

    The core never talks to a container runtime itself. Sources are handed
    to ``load_image`` (or used directly by the CLI) so the builder and query
    library can be exercised without a daemon.

    Example:
        class StaticSource:
            def __init__(self, lines: list[str]):
                self._lines = lines

            def history_lines(self, name: str) -> list[str]:
                return self._lines

            def inspect(self, name: str) -> list[dict[str, Any]]:
                return []
    """

    def history_lines(self, name: str) -> list[str]:
        """Return history lines for ``name``, oldest layer first.

        Raises:
            InspectionFailure: If the history cannot be read
        """
        ...

    def inspect(self, name: str) -> list[dict[str, Any]]:
        """Return the decoded inspect output for ``name``.

        Raises:
            InspectionFailure: If inspection or decoding fails
        """
        ...


def decode_inspect_output(raw: str | bytes, reference: str | None = None) -> list[dict[str, Any]]:
    """Decode inspect JSON into a list of objects.

    ``docker inspect`` prints an array; a single top-level object is
    wrapped in a list. No schema is enforced on the objects themselves.

    Raises:
        InspectionFailure: If ``raw`` is not JSON or not objects
    """
    try:
        decoded = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InspectionFailure("Failed to parse inspect output", reference=reference, cause=e) from e

    if isinstance(decoded, dict):
        decoded = [decoded]
    if not isinstance(decoded, list) or not all(isinstance(item, dict) for item in decoded):
        raise InspectionFailure(
            f"Inspect output must be a JSON array of objects, got {type(decoded).__name__}",
            reference=reference,
        )
    return decoded
