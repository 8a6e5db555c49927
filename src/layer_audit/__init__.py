"""layer-audit: descriptive analysis of container image layer history.

This package turns the layer history of a container image into structured
records and answers questions about them:

- **Builder**: Parse history lines into chained layer records
- **Image queries**: Filter layers by author, command or creation time
- **Analysis library**: Rankings, frequency counts and size statistics
- **Analyzer**: Collect everything into a single report
- **Sources**: Read history from the Docker daemon or from saved files

Usage:
    from layer_audit import LayerAnalyzer, build_image

    image = build_image("app:latest", [
        "L1 100 RUN a@x.com 2021-01-01T00:00:00Z t1,t2 build1",
        "L2 50 COPY b@x.com 2021-02-01T00:00:00Z  build2",
    ])
    image.total_size_bytes          # 150
    image.largest_n_layers(1)       # [L1]
    image.hierarchy(1)              # "L1 -> L2"

    result = LayerAnalyzer(top_n=3).analyze(image)
    print(result.report.median_size_bytes)

CLI:
    layer-audit analyze <image>
    layer-audit analyze <image> --history-file history.txt --format json
    layer-audit layer <image> <layer-id>
    layer-audit inspect <image>
"""

__version__ = "0.1.0"

# Models
from layer_audit.models.common import AuditError
from layer_audit.models.layer import LayerRecord
from layer_audit.models.image import ImageRecord
from layer_audit.models.report import AnalysisResult, LayerReport, LayerSummary

# Core
from layer_audit.core.builder import LayerChainBuilder, build_image, parse_layer_line
from layer_audit.core.analyzer import LayerAnalyzer

# Sources
from layer_audit.sources import DockerImageSource, FileImageSource, ImageSource, load_image

# Errors
from layer_audit.utils.errors import (
    InspectionFailure,
    InvalidSizeError,
    InvalidTimestampError,
    LayerAuditError,
    LayerParseError,
    MalformedInputError,
    MissingFieldError,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "AuditError",
    "LayerRecord",
    "ImageRecord",
    "AnalysisResult",
    "LayerReport",
    "LayerSummary",
    # Core
    "LayerChainBuilder",
    "build_image",
    "parse_layer_line",
    "LayerAnalyzer",
    # Sources
    "DockerImageSource",
    "FileImageSource",
    "ImageSource",
    "load_image",
    # Errors
    "InspectionFailure",
    "InvalidSizeError",
    "InvalidTimestampError",
    "LayerAuditError",
    "LayerParseError",
    "MalformedInputError",
    "MissingFieldError",
]
