"""Aggregation and ranking over plain sequences of layers.

These functions do not need an ImageRecord, so they also work on filtered
subsets (``image.layers_by_author(...)``) or layers gathered from several
images. None of them mutate their input; sorting always happens on a copy.

Rankings clamp to the number of available items: asking for more than
exists returns everything there is, and ``n <= 0`` returns an empty list.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import datetime
from typing import Any

from layer_audit.models.layer import LayerRecord

SortKey = Callable[[LayerRecord], Any]


def most_common(frequencies: Mapping[str, int], n: int) -> list[str]:
    """Return the ``n`` keys with the highest counts.

    Keys with equal counts keep the iteration order of ``frequencies``, so
    for a table built while scanning layers the first-seen key wins.
    """
    if n <= 0:
        return []
    ranked = sorted(frequencies.items(), key=lambda item: item[1], reverse=True)
    return [value for value, _ in ranked[:n]]


def most_common_commands(layers: Iterable[LayerRecord], n: int) -> list[str]:
    return most_common(Counter(layer.command for layer in layers), n)


def most_prolific_authors(layers: Iterable[LayerRecord], n: int) -> list[str]:
    return most_common(Counter(layer.author for layer in layers), n)


def most_common_tags(layers: Iterable[LayerRecord], n: int) -> list[str]:
    return most_common(Counter(tag for layer in layers for tag in layer.tags), n)


def sort_layers(
    layers: Iterable[LayerRecord],
    key: SortKey,
    n: int,
    reverse: bool = False,
) -> list[LayerRecord]:
    """Stable-sort a copy of ``layers`` by ``key`` and keep the first ``n``."""
    if n <= 0:
        return []
    return sorted(layers, key=key, reverse=reverse)[:n]


def _by_size(layer: LayerRecord) -> int:
    return layer.size_bytes


def _by_created(layer: LayerRecord) -> datetime:
    return layer.created_at


def largest_layers(layers: Iterable[LayerRecord], n: int) -> list[LayerRecord]:
    return sort_layers(layers, _by_size, n, reverse=True)


def smallest_layers(layers: Iterable[LayerRecord], n: int) -> list[LayerRecord]:
    return sort_layers(layers, _by_size, n)


def oldest_layers(layers: Iterable[LayerRecord], n: int) -> list[LayerRecord]:
    return sort_layers(layers, _by_created, n)


def newest_layers(layers: Iterable[LayerRecord], n: int) -> list[LayerRecord]:
    return sort_layers(layers, _by_created, n, reverse=True)


def layer_size_distribution(layers: Iterable[LayerRecord]) -> dict[int, int]:
    """Map each distinct layer size to the number of layers of that size."""
    return dict(Counter(layer.size_bytes for layer in layers))


def layers_in_date_range(
    layers: Iterable[LayerRecord],
    start: datetime,
    end: datetime,
) -> list[LayerRecord]:
    """Layers created strictly between ``start`` and ``end``."""
    return [layer for layer in layers if start < layer.created_at < end]


def layers_with_tags(layers: Iterable[LayerRecord]) -> list[LayerRecord]:
    """Layers with at least one non-empty tag."""
    return [layer for layer in layers if layer.is_tagged]


def layers_without_tags(layers: Iterable[LayerRecord]) -> list[LayerRecord]:
    """Layers whose tags are absent or only the empty placeholder."""
    return [layer for layer in layers if not layer.is_tagged]


def layers_with_tag(layers: Iterable[LayerRecord], tag: str) -> list[LayerRecord]:
    return [layer for layer in layers if layer.has_tag(tag)]


def layer_count_by_author(layers: Iterable[LayerRecord]) -> dict[str, int]:
    return dict(Counter(layer.author for layer in layers))


def layer_size_by_author(layers: Iterable[LayerRecord]) -> dict[str, int]:
    sizes: dict[str, int] = {}
    for layer in layers:
        sizes[layer.author] = sizes.get(layer.author, 0) + layer.size_bytes
    return sizes


def total_size(layers: Iterable[LayerRecord]) -> int:
    return sum(layer.size_bytes for layer in layers)


def average_size(layers: Sequence[LayerRecord]) -> int:
    """Mean layer size with integer division; 0 when there are no layers."""
    if not layers:
        return 0
    return total_size(layers) // len(layers)


def median_size(layers: Sequence[LayerRecord]) -> int:
    """Median layer size; an even count averages the middle two (truncated)."""
    if not layers:
        return 0
    sizes = sorted(layer.size_bytes for layer in layers)
    middle = len(sizes) // 2
    if len(sizes) % 2 == 0:
        return (sizes[middle - 1] + sizes[middle]) // 2
    return sizes[middle]
