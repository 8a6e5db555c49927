"""LayerAnalyzer for summarizing an image's layers."""

from __future__ import annotations

from layer_audit.core import analysis
from layer_audit.models.common import AuditError
from layer_audit.models.image import ImageRecord
from layer_audit.models.layer import DEFAULT_HIERARCHY_SEPARATOR, LayerRecord
from layer_audit.models.report import AnalysisResult, AuthorStats, LayerReport, LayerSummary
from layer_audit.utils.errors import LayerAuditError
from layer_audit.utils.logging import get_logger_with_context


def _summaries(layers: list[LayerRecord]) -> list[LayerSummary]:
    return [LayerSummary.from_layer(layer) for layer in layers]


class LayerAnalyzer:
    """Runs the query library over an image and collects a LayerReport.

    Example:
        analyzer = LayerAnalyzer(top_n=3)
        result = analyzer.analyze(image)

        if result.success:
            print(result.report.total_size_bytes)
            for layer in result.report.largest_layers:
                print(layer.id, layer.size_bytes)
    """

    def __init__(self, top_n: int = 5, separator: str = DEFAULT_HIERARCHY_SEPARATOR) -> None:
        """Initialize the analyzer.

        Args:
            top_n: Number of entries in each ranking
            separator: Separator used for the top layer's hierarchy
        """
        if top_n < 0:
            raise ValueError("top_n must not be negative")
        self._top_n = top_n
        self._separator = separator

    @property
    def top_n(self) -> int:
        return self._top_n

    def analyze(self, image: ImageRecord) -> AnalysisResult:
        """Analyze an image.

        Args:
            image: The image to analyze

        Returns:
            AnalysisResult containing the report or errors
        """
        log = get_logger_with_context(__name__, image=image.name)
        log.debug("Analyzing %d layers", image.layer_count)
        try:
            report = self._build_report(image)
        except LayerAuditError as e:
            log.error("Analysis failed: %s", e.message)
            return AnalysisResult.fail([e.to_audit_error()])
        except (ValueError, TypeError) as e:
            log.error("Analysis failed: %s", e)
            return AnalysisResult.fail([AuditError(code="ANALYSIS_ERROR", message=str(e))])

        log.info(
            "Analyzed %d layers (%d bytes)",
            report.layer_count,
            report.total_size_bytes,
        )
        return AnalysisResult.ok(report)

    def _build_report(self, image: ImageRecord) -> LayerReport:
        layers = list(image.layers)
        n = self._top_n

        counts = analysis.layer_count_by_author(layers)
        sizes = analysis.layer_size_by_author(layers)
        authors = [
            AuthorStats(author=author, layer_count=count, size_bytes=sizes[author])
            for author, count in counts.items()
        ]

        top_hierarchy = None
        top_cumulative = 0
        if layers:
            top = layers[-1]
            top_hierarchy = top.hierarchy(layers, self._separator)
            top_cumulative = top.cumulative_size(layers)

        return LayerReport(
            image_name=image.name,
            top_n=n,
            layer_count=len(layers),
            total_size_bytes=image.total_size_bytes,
            average_size_bytes=analysis.average_size(layers),
            median_size_bytes=analysis.median_size(layers),
            total_tags=image.total_tags(),
            unique_authors=image.unique_authors(),
            unique_commands=image.unique_commands(),
            unique_tags=image.unique_tags(),
            largest_layers=_summaries(analysis.largest_layers(layers, n)),
            smallest_layers=_summaries(analysis.smallest_layers(layers, n)),
            oldest_layers=_summaries(analysis.oldest_layers(layers, n)),
            newest_layers=_summaries(analysis.newest_layers(layers, n)),
            most_common_commands=analysis.most_common_commands(layers, n),
            most_prolific_authors=analysis.most_prolific_authors(layers, n),
            most_common_tags=analysis.most_common_tags(layers, n),
            authors=authors,
            size_distribution=analysis.layer_size_distribution(layers),
            untagged_layer_count=len(analysis.layers_without_tags(layers)),
            top_layer_hierarchy=top_hierarchy,
            top_layer_cumulative_size=top_cumulative,
        )
