"""Layer record model."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from datetime import datetime

from pydantic import BaseModel, Field, model_validator

DEFAULT_HIERARCHY_SEPARATOR = " -> "


class LayerRecord(BaseModel):
    """One layer of an image's build history.

    Layers do not hold their parent directly. ``parent_index`` points at the
    parent's position in the sequence that owns both records (normally
    ``ImageRecord.layers``), so every traversal method takes that sequence.
    A parent always sits at a lower index than its child, which keeps
    chains acyclic.
    """

    model_config = {"frozen": True}

    id: str = Field(description="Layer identifier as reported by the history tool")
    size_bytes: int = Field(ge=0, description="Layer size in bytes")
    command: str = Field(description="Build instruction that produced the layer")
    author: str = Field(description="Layer author")
    created_at: datetime = Field(description="Layer creation timestamp")
    created_by: str = Field(description="Full command line that created the layer")
    tags: tuple[str, ...] = Field(default=(), description="Tags attached to the layer")
    index: int = Field(default=0, ge=0, description="Position in the owning sequence")
    parent_index: int | None = Field(default=None, ge=0, description="Position of the parent layer")

    @model_validator(mode="after")
    def _check_parent_precedes(self) -> "LayerRecord":
        if self.parent_index is not None and self.parent_index >= self.index:
            raise ValueError(
                f"parent_index {self.parent_index} must be lower than index {self.index}"
            )
        return self

    @property
    def is_root(self) -> bool:
        """Whether the layer has no parent."""
        return self.parent_index is None

    def parent(self, layers: Sequence[LayerRecord]) -> LayerRecord | None:
        """Return the parent layer, or None for a root layer."""
        if self.parent_index is None:
            return None
        return layers[self.parent_index]

    def ancestors(self, layers: Sequence[LayerRecord]) -> Iterator[LayerRecord]:
        """Yield ancestors, nearest parent first."""
        current = self.parent(layers)
        while current is not None:
            yield current
            current = current.parent(layers)

    def hierarchy(
        self,
        layers: Sequence[LayerRecord],
        separator: str = DEFAULT_HIERARCHY_SEPARATOR,
    ) -> str:
        """Return layer ids from the root ancestor down to this layer."""
        chain = [self.id]
        chain.extend(ancestor.id for ancestor in self.ancestors(layers))
        return separator.join(reversed(chain))

    def cumulative_size(self, layers: Sequence[LayerRecord]) -> int:
        """Return the size of this layer plus all of its ancestors."""
        return self.size_bytes + sum(ancestor.size_bytes for ancestor in self.ancestors(layers))

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    @property
    def is_tagged(self) -> bool:
        """Whether the layer carries at least one non-empty tag."""
        return any(self.tags)

    def details(self) -> str:
        """Return every attribute of the layer on one line."""
        return (
            f"ID: {self.id}, Size: {self.size_bytes} bytes, Command: {self.command}, "
            f"Author: {self.author}, Created: {self.created_at.isoformat()}, "
            f"CreatedBy: {self.created_by}, Tags: {list(self.tags)}"
        )

    def __str__(self) -> str:
        return f"ID: {self.id}, Size: {self.size_bytes} bytes, Command: {self.command}, Author: {self.author}"
