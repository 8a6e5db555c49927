"""Image source backed by the local Docker daemon."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

from layer_audit.utils.errors import InspectionFailure
from layer_audit.utils.logging import get_logger

logger = get_logger(__name__)

MISSING_ID = "<missing>"
PLACEHOLDER = "-"
SHORT_ID_LENGTH = 12

# Dockerfile instructions recognised at the start of a CreatedBy string
INSTRUCTIONS = frozenset(
    {
        "ADD", "ARG", "CMD", "COPY", "ENTRYPOINT", "ENV", "EXPOSE", "HEALTHCHECK",
        "LABEL", "MAINTAINER", "ONBUILD", "RUN", "SHELL", "STOPSIGNAL", "USER",
        "VOLUME", "WORKDIR",
    }
)

_NOP_MARKER = re.compile(r"#\(nop\)\s+(\w+)")
_WHITESPACE = re.compile(r"\s+")


def short_id(layer_id: str | None) -> str:
    """Shorten a ``sha256:...`` id the way ``docker history`` does."""
    if not layer_id or layer_id == MISSING_ID:
        return MISSING_ID
    return layer_id.split(":", 1)[-1][:SHORT_ID_LENGTH]


def instruction_of(created_by: str) -> str:
    """Guess the Dockerfile instruction behind a CreatedBy string.

    Legacy builder entries look like ``/bin/sh -c #(nop)  ENV A=b`` for
    metadata steps and ``/bin/sh -c apt-get ...`` for RUN steps. BuildKit
    entries start with the instruction itself.
    """
    nop = _NOP_MARKER.search(created_by)
    if nop and nop.group(1).upper() in INSTRUCTIONS:
        return nop.group(1).upper()

    first = created_by.split(maxsplit=1)[0].upper() if created_by.strip() else ""
    if first in INSTRUCTIONS:
        return first
    return "RUN" if created_by.strip() else PLACEHOLDER


def _single_token(value: str | None) -> str:
    value = (value or "").strip()
    return _WHITESPACE.sub("_", value) if value else PLACEHOLDER


def history_entry_to_line(entry: dict[str, Any], author: str | None = None) -> str:
    """Render one Docker API history entry as a history line."""
    created_by = _WHITESPACE.sub(" ", entry.get("CreatedBy") or "").strip()
    created = datetime.fromtimestamp(int(entry.get("Created") or 0), tz=timezone.utc)
    tags = ",".join(entry.get("Tags") or [])

    return " ".join(
        [
            short_id(entry.get("Id")),
            str(int(entry.get("Size") or 0)),
            instruction_of(created_by),
            _single_token(author),
            created.strftime("%Y-%m-%dT%H:%M:%SZ"),
            tags,
            created_by or PLACEHOLDER,
        ]
    )


class DockerImageSource:
    """Reads image history and inspect data through the Docker SDK.

    Example:
        source = DockerImageSource()
        image = load_image("nginx:latest", source)
        print(image.largest_n_layers(3))
    """

    def __init__(self, base_url: str | None = None, timeout: int = 60, client: Any = None) -> None:
        """Initialize the Docker source.

        Args:
            base_url: Daemon URL; the environment is used when None
            timeout: API timeout in seconds
            client: Pre-built ``docker.DockerClient``
        """
        self._base_url = base_url
        self._timeout = timeout
        self._client = client
        self._inspected: dict[str, list[dict[str, Any]]] = {}

    @property
    def client(self) -> Any:
        """Get the Docker client, creating it if necessary."""
        if self._client is None:
            try:
                import docker
            except ImportError as e:
                raise InspectionFailure(
                    "Docker SDK not available. Install with: pip install 'layer-audit[docker]'",
                    cause=e,
                ) from e

            try:
                if self._base_url:
                    self._client = docker.DockerClient(base_url=self._base_url, timeout=self._timeout)
                else:
                    self._client = docker.from_env(timeout=self._timeout)
            except docker.errors.DockerException as e:
                raise InspectionFailure("Failed to connect to Docker daemon", cause=e) from e
        return self._client

    def inspect(self, name: str) -> list[dict[str, Any]]:
        """Return ``docker inspect`` data for ``name`` as a one-element list.

        Results are cached per name, so reading the history and then the
        inspect data of one image asks the daemon only once.
        """
        if name in self._inspected:
            return list(self._inspected[name])

        logger.debug("Inspecting %s", name)
        try:
            attrs = self.client.api.inspect_image(name)
        except InspectionFailure:
            raise
        except Exception as e:
            raise InspectionFailure(f"Failed to inspect image: {name}", reference=name, cause=e) from e

        if not isinstance(attrs, dict):
            raise InspectionFailure(
                f"Unexpected inspect payload for {name}: {type(attrs).__name__}",
                reference=name,
            )
        self._inspected[name] = [attrs]
        return [attrs]

    def history_lines(self, name: str) -> list[str]:
        """Return history lines for ``name``, oldest layer first."""
        logger.debug("Reading history of %s", name)
        try:
            entries = self.client.api.history(name)
        except InspectionFailure:
            raise
        except Exception as e:
            raise InspectionFailure(f"Failed to read history of image: {name}", reference=name, cause=e) from e

        author = None
        inspected = self.inspect(name)
        if inspected:
            author = inspected[0].get("Author")

        # the daemon lists the newest layer first
        return [history_entry_to_line(entry, author) for entry in reversed(entries)]
