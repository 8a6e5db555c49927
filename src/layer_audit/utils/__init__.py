"""Utility functions for layer-audit."""

from layer_audit.utils.logging import configure_logging, get_logger, get_logger_with_context
from layer_audit.utils.errors import (
    LayerAuditError,
    LayerParseError,
    MalformedInputError,
    InvalidSizeError,
    InvalidTimestampError,
    MissingFieldError,
    InspectionFailure,
    ConfigurationError,
)
from layer_audit.utils.config import (
    LayerAuditConfig,
    AnalysisConfig,
    DockerConfig,
    OutputConfig,
    load_config,
    save_config,
    get_config,
    set_config,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
    # Errors
    "LayerAuditError",
    "LayerParseError",
    "MalformedInputError",
    "InvalidSizeError",
    "InvalidTimestampError",
    "MissingFieldError",
    "InspectionFailure",
    "ConfigurationError",
    # Config
    "LayerAuditConfig",
    "AnalysisConfig",
    "DockerConfig",
    "OutputConfig",
    "load_config",
    "save_config",
    "get_config",
    "set_config",
]
