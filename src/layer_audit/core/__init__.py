"""Core functionality for layer-audit.

This module contains the history-line builder, the layer query library
and the analyzer that combines them into a report.
"""

from layer_audit.core.builder import (
    LayerChainBuilder,
    build_image,
    parse_layer_line,
    parse_size,
    parse_timestamp,
)
from layer_audit.core.analysis import (
    average_size,
    largest_layers,
    layer_count_by_author,
    layer_size_by_author,
    layer_size_distribution,
    layers_in_date_range,
    layers_with_tag,
    layers_with_tags,
    layers_without_tags,
    median_size,
    most_common,
    most_common_commands,
    most_common_tags,
    most_prolific_authors,
    newest_layers,
    oldest_layers,
    smallest_layers,
    sort_layers,
    total_size,
)
from layer_audit.core.analyzer import LayerAnalyzer

__all__ = [
    # Builder
    "LayerChainBuilder",
    "build_image",
    "parse_layer_line",
    "parse_size",
    "parse_timestamp",
    # Analysis
    "average_size",
    "largest_layers",
    "layer_count_by_author",
    "layer_size_by_author",
    "layer_size_distribution",
    "layers_in_date_range",
    "layers_with_tag",
    "layers_with_tags",
    "layers_without_tags",
    "median_size",
    "most_common",
    "most_common_commands",
    "most_common_tags",
    "most_prolific_authors",
    "newest_layers",
    "oldest_layers",
    "smallest_layers",
    "sort_layers",
    "total_size",
    # Analyzer
    "LayerAnalyzer",
]
