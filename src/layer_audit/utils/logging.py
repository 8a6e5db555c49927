"""Logging setup for layer-audit.

Console logging goes through Rich so it shares styling with the CLI
output; ``structured=True`` switches to plain ``key=value`` lines that are
easier to grep in CI logs.
"""

import logging
import os
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAMESPACE = "layer_audit"
LEVEL_ENV_VAR = "LAYER_AUDIT_LOG_LEVEL"


class StructuredFormatter(logging.Formatter):
    """Formatter that appends context fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = getattr(record, "context", None)
        if not fields:
            return message
        pairs = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
        return f"{message} {pairs}"


def _resolve_level(level: str | None) -> int:
    name = (level or os.environ.get(LEVEL_ENV_VAR) or "INFO").upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {name}")
    return resolved


def configure_logging(level: str | None = None, structured: bool = False) -> logging.Logger:
    """Configure the ``layer_audit`` logger hierarchy.

    Args:
        level: Log level name. Falls back to $LAYER_AUDIT_LOG_LEVEL, then INFO.
        structured: Emit plain structured lines instead of Rich output.

    Returns:
        The configured namespace logger
    """
    handler: logging.Handler
    if structured:
        handler = logging.StreamHandler()
        handler.setFormatter(
            StructuredFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(_resolve_level(level))
    logger.handlers = [handler]
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``layer_audit`` namespace."""
    if not name.startswith(LOGGER_NAMESPACE):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)


class ContextAdapter(logging.LoggerAdapter):
    """Adapter that attaches fixed context (image name, source) to records."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["context"] = {**self.extra, **extra.get("context", {})}
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger_with_context(name: str, **context: Any) -> ContextAdapter:
    """Get a logger that tags every record with ``context``."""
    return ContextAdapter(get_logger(name), context)
