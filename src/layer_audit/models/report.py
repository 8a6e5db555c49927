"""Analysis report models."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from layer_audit.models.common import AuditError
from layer_audit.models.layer import LayerRecord


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LayerSummary(BaseModel):
    """Compact view of a layer for reports."""

    model_config = {"frozen": True}

    id: str
    size_bytes: int
    command: str
    author: str
    created_at: datetime
    tags: list[str] = Field(default_factory=list)

    @classmethod
    def from_layer(cls, layer: LayerRecord) -> "LayerSummary":
        return cls(
            id=layer.id,
            size_bytes=layer.size_bytes,
            command=layer.command,
            author=layer.author,
            created_at=layer.created_at,
            tags=list(layer.tags),
        )


class AuthorStats(BaseModel):
    """Per-author layer count and size."""

    model_config = {"frozen": True}

    author: str
    layer_count: int
    size_bytes: int


class LayerReport(BaseModel):
    """Descriptive statistics for one image's layers."""

    model_config = {"frozen": True}

    image_name: str = Field(description="Analyzed image")
    generated_at: datetime = Field(
        default_factory=_utcnow,
        description="Report generation timestamp",
    )
    top_n: int = Field(description="Size of each ranking")

    # Totals
    layer_count: int = Field(default=0, description="Number of layers")
    total_size_bytes: int = Field(default=0, description="Sum of layer sizes")
    average_size_bytes: int = Field(default=0, description="Mean layer size, truncated")
    median_size_bytes: int = Field(default=0, description="Median layer size, truncated")
    total_tags: int = Field(default=0, description="Tag count including duplicates")

    # Distinct values
    unique_authors: list[str] = Field(default_factory=list)
    unique_commands: list[str] = Field(default_factory=list)
    unique_tags: list[str] = Field(default_factory=list)

    # Rankings
    largest_layers: list[LayerSummary] = Field(default_factory=list)
    smallest_layers: list[LayerSummary] = Field(default_factory=list)
    oldest_layers: list[LayerSummary] = Field(default_factory=list)
    newest_layers: list[LayerSummary] = Field(default_factory=list)
    most_common_commands: list[str] = Field(default_factory=list)
    most_prolific_authors: list[str] = Field(default_factory=list)
    most_common_tags: list[str] = Field(default_factory=list)

    # Aggregates
    authors: list[AuthorStats] = Field(default_factory=list, description="Per-author totals")
    size_distribution: dict[int, int] = Field(
        default_factory=dict,
        description="Layer size to number of layers with that size",
    )
    untagged_layer_count: int = Field(default=0, description="Layers without a non-empty tag")
    top_layer_hierarchy: str | None = Field(
        default=None,
        description="Id chain from the root to the newest layer",
    )
    top_layer_cumulative_size: int = Field(default=0, description="Cumulative size of the newest layer")

    @property
    def is_empty(self) -> bool:
        return self.layer_count == 0


class AnalysisResult(BaseModel):
    """Result of an analysis operation."""

    model_config = {"frozen": True}

    success: bool = Field(description="Whether the analysis succeeded")
    report: LayerReport | None = Field(default=None, description="The report if successful")
    errors: list[AuditError] = Field(default_factory=list, description="Errors that occurred")

    @classmethod
    def ok(cls, report: LayerReport) -> "AnalysisResult":
        """Create a successful result."""
        return cls(success=True, report=report)

    @classmethod
    def fail(cls, errors: list[AuditError]) -> "AnalysisResult":
        """Create a failed result."""
        return cls(success=False, errors=errors)
