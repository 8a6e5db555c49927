"""Image sources for layer-audit.

A source supplies the raw history lines and inspect data for an image.
``load_image`` turns that into an ImageRecord.
"""

from layer_audit.core.builder import build_image
from layer_audit.models.image import ImageRecord
from layer_audit.sources.base import ImageSource, decode_inspect_output
from layer_audit.sources.docker import DockerImageSource, history_entry_to_line
from layer_audit.sources.file import FileImageSource
from layer_audit.utils.logging import get_logger

logger = get_logger(__name__)


def load_image(name: str, source: ImageSource, with_inspect: bool = True) -> ImageRecord:
    """Read an image through ``source`` and build its ImageRecord.

    Args:
        name: Image name or reference
        source: Collaborator providing history lines and inspect data
        with_inspect: Attach the decoded inspect output to the record

    Raises:
        InspectionFailure: If the source cannot provide the data
        LayerParseError: If a history line is invalid
    """
    lines = source.history_lines(name)
    inspect_data = source.inspect(name) if with_inspect else None
    logger.debug("Loaded %d history lines for %s", len(lines), name)
    return build_image(name, lines, inspect_data)


__all__ = [
    "ImageSource",
    "DockerImageSource",
    "FileImageSource",
    "decode_inspect_output",
    "history_entry_to_line",
    "load_image",
]
