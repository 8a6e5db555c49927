"""Image record model and image-level queries."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, model_validator

from layer_audit.models.layer import DEFAULT_HIERARCHY_SEPARATOR, LayerRecord


def _unique(values: Any) -> list[str]:
    # dict keeps first-seen order
    return list(dict.fromkeys(values))


class ImageRecord(BaseModel):
    """A container image and its layers in history order.

    ``layers[0]`` is the root (oldest) layer and every later layer's parent is
    the one before it. The total size is derived from the layers on every
    access, so it always equals the sum of ``size_bytes``.

    Example:
        image = build_image("app:latest", lines)
        image.largest_n_layers(3)
        image.hierarchy(len(image.layers) - 1)
    """

    model_config = {"frozen": True}

    name: str = Field(description="Image name or reference")
    layers: tuple[LayerRecord, ...] = Field(default=(), description="Layers, root first")
    inspect_data: list[dict[str, Any]] | None = Field(
        default=None,
        description="Raw decoded inspect output, kept opaque",
    )

    @model_validator(mode="after")
    def _check_layer_positions(self) -> "ImageRecord":
        for position, layer in enumerate(self.layers):
            if layer.index != position:
                raise ValueError(
                    f"layer {layer.id!r} has index {layer.index} but sits at position {position}"
                )
        return self

    @property
    def total_size_bytes(self) -> int:
        """Sum of all layer sizes."""
        return sum(layer.size_bytes for layer in self.layers)

    @property
    def layer_count(self) -> int:
        return len(self.layers)

    def __str__(self) -> str:
        return f"Name: {self.name}, Size: {self.total_size_bytes} bytes, Layers: {len(self.layers)}"

    # Traversal

    def parent_of(self, layer: LayerRecord | int) -> LayerRecord | None:
        """Return the parent of a layer (given as record or index)."""
        return self._layer_at(layer).parent(self.layers)

    def hierarchy(
        self,
        layer: LayerRecord | int,
        separator: str = DEFAULT_HIERARCHY_SEPARATOR,
    ) -> str:
        """Return the id chain from the root down to ``layer``."""
        return self._layer_at(layer).hierarchy(self.layers, separator)

    def cumulative_size(self, layer: LayerRecord | int) -> int:
        """Return the size of ``layer`` plus all of its ancestors."""
        return self._layer_at(layer).cumulative_size(self.layers)

    def _layer_at(self, layer: LayerRecord | int) -> LayerRecord:
        if isinstance(layer, LayerRecord):
            return self.layers[layer.index]
        return self.layers[layer]

    # Queries

    def layers_by_author(self, author: str) -> list[LayerRecord]:
        """Layers whose author matches exactly."""
        return [layer for layer in self.layers if layer.author == author]

    def layers_by_command(self, command: str) -> list[LayerRecord]:
        """Layers whose command matches exactly."""
        return [layer for layer in self.layers if layer.command == command]

    def layers_in_time_range(self, start: datetime, end: datetime) -> list[LayerRecord]:
        """Layers created strictly after ``start`` and strictly before ``end``."""
        return [layer for layer in self.layers if start < layer.created_at < end]

    def last_n_layers(self, n: int) -> list[LayerRecord]:
        """The last ``n`` layers in stored order, clamped to the layer count."""
        if n <= 0:
            return []
        return list(self.layers[-n:])

    def largest_n_layers(self, n: int) -> list[LayerRecord]:
        """The ``n`` largest layers; equal sizes keep their stored order."""
        if n <= 0:
            return []
        ranked = sorted(self.layers, key=lambda layer: layer.size_bytes, reverse=True)
        return ranked[:n]

    def total_tags(self) -> int:
        """Number of tags across all layers, duplicates and placeholders included."""
        return sum(len(layer.tags) for layer in self.layers)

    def unique_authors(self) -> list[str]:
        """Distinct authors in first-seen order."""
        return _unique(layer.author for layer in self.layers)

    def unique_commands(self) -> list[str]:
        """Distinct commands in first-seen order."""
        return _unique(layer.command for layer in self.layers)

    def unique_tags(self) -> list[str]:
        """Distinct tags in first-seen order."""
        return _unique(tag for layer in self.layers for tag in layer.tags)
