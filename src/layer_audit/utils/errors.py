"""Error types for layer-audit."""

from __future__ import annotations

from typing import Any

from layer_audit.models.common import AuditError


class LayerAuditError(Exception):
    """Base exception for layer-audit."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_audit_error(self) -> AuditError:
        """Convert to AuditError model."""
        return AuditError(code=self.code, message=self.message, details=self.details)


class LayerParseError(LayerAuditError):
    """A history line could not be turned into a layer record."""

    def __init__(
        self,
        message: str,
        code: str,
        line: str,
        line_number: int | None = None,
        **details: Any,
    ):
        context: dict[str, Any] = {"line": line}
        if line_number is not None:
            context["line_number"] = line_number
            message = f"line {line_number}: {message}"
        context.update(details)
        super().__init__(message, code=code, details=context)
        self.line = line
        self.line_number = line_number


class MalformedInputError(LayerParseError):
    """History line has fewer fields than required."""

    def __init__(self, line: str, field_count: int, line_number: int | None = None):
        super().__init__(
            f"Malformed history line, expected at least 6 fields but got {field_count}: {line!r}",
            code="MALFORMED_INPUT",
            line=line,
            line_number=line_number,
            field_count=field_count,
        )


class InvalidSizeError(LayerParseError):
    """Size field is not a non-negative base-10 integer."""

    def __init__(self, value: str, line: str, line_number: int | None = None):
        super().__init__(
            f"Invalid layer size: {value!r}",
            code="INVALID_SIZE",
            line=line,
            line_number=line_number,
            value=value,
        )


class InvalidTimestampError(LayerParseError):
    """Creation time field is not an RFC3339 timestamp."""

    def __init__(self, value: str, line: str, line_number: int | None = None):
        super().__init__(
            f"Invalid creation time: {value!r}",
            code="INVALID_TIMESTAMP",
            line=line,
            line_number=line_number,
            value=value,
        )


class MissingFieldError(LayerParseError):
    """A trailing field required by the line format is absent."""

    def __init__(self, field: str, line: str, line_number: int | None = None):
        super().__init__(
            f"Missing field '{field}' in history line: {line!r}",
            code="MISSING_FIELD",
            line=line,
            line_number=line_number,
            field=field,
        )


class InspectionFailure(LayerAuditError):
    """Inspecting an image or decoding the inspect output failed."""

    def __init__(self, message: str, reference: str | None = None, cause: BaseException | None = None):
        details: dict[str, Any] = {}
        if reference:
            details["reference"] = reference
        if cause is not None:
            details["cause"] = f"{type(cause).__name__}: {cause}"
        super().__init__(message, code="INSPECTION_FAILED", details=details)
        if cause is not None:
            self.__cause__ = cause


class ConfigurationError(LayerAuditError):
    """Configuration error."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, code="CONFIG_ERROR", details=details)
