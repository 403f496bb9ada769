"""
Exception classes for resource_typer.

Every failure a generator run can hit maps to one ErrorKind so that batch
callers can report outcomes instead of crashing.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Classification of generation failures."""

    CONFIGURATION_MISSING = "configuration_missing"
    SOURCE_NOT_FOUND = "source_not_found"
    INTROSPECTION_FAILURE = "introspection_failure"
    GENERATION_FAILURE = "generation_failure"


class ResourceTyperException(Exception):
    """Base exception class for all resource_typer exceptions."""

    kind: ErrorKind = ErrorKind.GENERATION_FAILURE

    def __init__(self, reason: str, details: Optional[Dict[str, Any]] = None):
        self.reason = reason
        self.details = details or {}
        message = f"{reason}"
        if self.details:
            message += f" - {self.details}"
        super().__init__(message)


class ConfigurationMissingError(ResourceTyperException):
    """
    Raised when a configured path or section cannot be used.

    A missing output directory is not an error (it is created on demand);
    this covers things like a models_path that does not exist.
    """

    kind = ErrorKind.CONFIGURATION_MISSING


class SourceNotFoundError(ResourceTyperException):
    """
    Raised when a model, table or column is absent from a schema source.

    Example:
        >>> raise SourceNotFoundError(
        ...     reason="Model class not found",
        ...     details={"model": "Invoice", "models_path": "app/models"}
        ... )
    """

    kind = ErrorKind.SOURCE_NOT_FOUND


class IntrospectionError(ResourceTyperException):
    """Raised when a schema lookup fails for a reason other than absence."""

    kind = ErrorKind.INTROSPECTION_FAILURE


class GenerationError(ResourceTyperException):
    """Raised when building or writing a single declaration file fails."""

    kind = ErrorKind.GENERATION_FAILURE


def error_kind_for(exc: BaseException) -> ErrorKind:
    if isinstance(exc, ResourceTyperException):
        return exc.kind
    return ErrorKind.GENERATION_FAILURE
