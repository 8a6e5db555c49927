"""Data models for layer-audit.

All models are Pydantic BaseModel with frozen=True for immutability.
"""

from layer_audit.models.common import AuditError
from layer_audit.models.layer import DEFAULT_HIERARCHY_SEPARATOR, LayerRecord
from layer_audit.models.image import ImageRecord
from layer_audit.models.report import (
    AnalysisResult,
    AuthorStats,
    LayerReport,
    LayerSummary,
)

__all__ = [
    # Common
    "AuditError",
    # Layer
    "DEFAULT_HIERARCHY_SEPARATOR",
    "LayerRecord",
    # Image
    "ImageRecord",
    # Report
    "AnalysisResult",
    "AuthorStats",
    "LayerReport",
    "LayerSummary",
]
