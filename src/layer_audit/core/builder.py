"""Building layer records from layer-history text.

Each history line has the form::

    <id> <size> <command> <author> <created-at> <tags> <created-by...>

Fields are separated by single whitespace characters, so two separators in
a row produce an empty field. That is how a layer without tags is written::

    L2 50 COPY b@x.com 2021-02-01T00:00:00Z  build2

The created-at field is an RFC3339 timestamp and the tags field is a comma
separated list. Everything after the tags field is the created-by text.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from layer_audit.models.image import ImageRecord
from layer_audit.models.layer import LayerRecord
from layer_audit.utils.errors import (
    InvalidSizeError,
    InvalidTimestampError,
    MalformedInputError,
    MissingFieldError,
)
from layer_audit.utils.logging import get_logger

logger = get_logger(__name__)

MIN_FIELDS = 6
MAX_FIELDS = 7
MAX_SIZE = 2**63 - 1

_FIELD_SEPARATOR = re.compile(r"\s")
_SIZE_PATTERN = re.compile(r"[+-]?[0-9]+")
_RFC3339_PATTERN = re.compile(
    r"(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})"
)


def split_fields(line: str) -> list[str]:
    """Split a history line into at most seven fields."""
    return _FIELD_SEPARATOR.split(line.strip(), maxsplit=MAX_FIELDS - 1)


def parse_size(value: str, line: str = "", line_number: int | None = None) -> int:
    """Parse a base-10, non-negative byte count that fits in a signed 64-bit integer."""
    if not _SIZE_PATTERN.fullmatch(value):
        raise InvalidSizeError(value, line, line_number)
    # int() refuses digit strings past a few thousand characters
    if len(value.lstrip("+-").lstrip("0")) > len(str(MAX_SIZE)):
        raise InvalidSizeError(value, line, line_number)
    size = int(value)
    if size < 0 or size > MAX_SIZE:
        raise InvalidSizeError(value, line, line_number)
    return size


def parse_timestamp(value: str, line: str = "", line_number: int | None = None) -> datetime:
    """Parse an RFC3339 timestamp such as ``2021-01-01T00:00:00Z``.

    A UTC offset is mandatory. Fractional seconds are accepted and truncated
    to microseconds.
    """
    match = _RFC3339_PATTERN.fullmatch(value)
    if match is None:
        raise InvalidTimestampError(value, line, line_number)

    offset = match.group("offset")
    if offset == "Z":
        offset = "+00:00"
    fraction = match.group("fraction")
    normalized = match.group("base")
    if fraction:
        normalized = f"{normalized}.{fraction[:6].ljust(6, '0')}"

    try:
        return datetime.fromisoformat(f"{normalized}{offset}")
    except ValueError as e:
        raise InvalidTimestampError(value, line, line_number) from e


def parse_layer_line(
    line: str,
    parent: LayerRecord | None = None,
    line_number: int | None = None,
) -> LayerRecord:
    """Build a LayerRecord from one history line.

    Args:
        line: The history line
        parent: The preceding layer of the same image, if any
        line_number: Position of the line in its input, for error messages

    Returns:
        The parsed layer, positioned right after ``parent``

    Raises:
        MalformedInputError: If the line has fewer than six fields
        InvalidSizeError: If the size field is not a non-negative integer
        InvalidTimestampError: If the created-at field is not RFC3339
        MissingFieldError: If the created-by field is absent
    """
    fields = split_fields(line)
    if len(fields) < MIN_FIELDS:
        raise MalformedInputError(line, len(fields), line_number)

    layer_id, raw_size, command, author, raw_created, raw_tags = fields[:MIN_FIELDS]
    size = parse_size(raw_size, line, line_number)
    created_at = parse_timestamp(raw_created, line, line_number)

    created_by = fields[MIN_FIELDS].strip() if len(fields) == MAX_FIELDS else ""
    if not created_by:
        raise MissingFieldError("created_by", line, line_number)

    index = 0 if parent is None else parent.index + 1
    return LayerRecord(
        id=layer_id,
        size_bytes=size,
        command=command,
        author=author,
        created_at=created_at,
        created_by=created_by,
        # "" splits to [""]: an empty tag column keeps one placeholder tag
        tags=tuple(raw_tags.split(",")),
        index=index,
        parent_index=None if parent is None else parent.index,
    )


class LayerChainBuilder:
    """Assembles an ImageRecord from history lines, oldest layer first.

    Every added line becomes the child of the line added before it.

    Example:
        builder = LayerChainBuilder("app:latest")
        builder.add_lines(lines)
        image = builder.build()
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._layers: list[LayerRecord] = []
        self._line_number = 0

    @property
    def layers(self) -> list[LayerRecord]:
        """Layers parsed so far."""
        return list(self._layers)

    def add_line(self, line: str) -> LayerRecord:
        """Parse ``line`` as the child of the most recently added layer."""
        self._line_number += 1
        parent = self._layers[-1] if self._layers else None
        layer = parse_layer_line(line, parent=parent, line_number=self._line_number)
        self._layers.append(layer)
        return layer

    def add_lines(self, lines: Iterable[str]) -> "LayerChainBuilder":
        """Parse several lines in order. Blank lines are skipped."""
        for line in lines:
            if not line.strip():
                self._line_number += 1
                continue
            self.add_line(line)
        return self

    def build(self, inspect_data: list[dict[str, Any]] | None = None) -> ImageRecord:
        """Return the assembled image."""
        logger.debug("Built image %s with %d layers", self._name, len(self._layers))
        return ImageRecord(name=self._name, layers=tuple(self._layers), inspect_data=inspect_data)


def build_image(
    name: str,
    lines: Iterable[str],
    inspect_data: list[dict[str, Any]] | None = None,
) -> ImageRecord:
    """Parse history lines (oldest first) into an ImageRecord."""
    return LayerChainBuilder(name).add_lines(lines).build(inspect_data)
