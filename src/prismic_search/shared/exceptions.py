"""
Exception hierarchy for Prismic advanced search.

    PrismicSearchError
    ├── APIError
    │   ├── BackendRequestFailure    search/introspection round trip failed
    │   ├── RateLimitError           429 after retries, or circuit open
    │   ├── NetworkError
    │   └── ServiceUnavailableError  HTTP 5xx
    ├── SchemaUnavailableError       introspection failed or malformed
    ├── ValidationError
    │   ├── InvalidQuerySyntaxError  raw input has no ``field: value`` pair
    │   └── InvalidParameterError
    ├── DataError
    │   ├── NoEligibleTypeError
    │   ├── NotFoundError
    │   └── ParseError
    └── ConfigurationError

Each class carries its classification (category, severity, retryable) as
class attributes; instances may override ``retryable``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Any, ClassVar


class ErrorSeverity(Enum):
    WARNING = auto()  # Recoverable, can continue
    ERROR = auto()  # Failed but can retry
    CRITICAL = auto()  # Cannot continue
    TRANSIENT = auto()  # Temporary, should retry automatically


class ErrorCategory(Enum):
    API = "api"
    SCHEMA = "schema"
    VALIDATION = "validation"
    DATA = "data"
    CONFIGURATION = "config"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Guidance attached to an error for agents and logs."""

    operation: str | None = None
    input_value: Any = None
    suggestion: str | None = None
    example: str | None = None
    retry_after: float | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def with_defaults(self, **defaults: Any) -> ErrorContext:
        """Fill unset fields from ``defaults``; explicitly set fields win."""
        missing = {key: value for key, value in defaults.items() if getattr(self, key) is None}
        return replace(self, **missing) if missing else self


class PrismicSearchError(Exception):
    """Base exception for all Prismic search errors."""

    category: ClassVar[ErrorCategory] = ErrorCategory.API
    default_severity: ClassVar[ErrorSeverity] = ErrorSeverity.ERROR
    default_retryable: ClassVar[bool] = False

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        retryable: bool | None = None,
    ) -> None:
        super().__init__(message)
        self.context = context or ErrorContext()
        self.severity = self.default_severity
        self.retryable = self.default_retryable if retryable is None else retryable

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready description of the error."""
        result: dict[str, Any] = {
            "error": str(self),
            "category": self.category.value,
            "severity": self.severity.name.lower(),
            "retryable": self.retryable,
        }
        optional = {
            "operation": self.context.operation,
            "suggestion": self.context.suggestion,
            "example": self.context.example,
            "retry_after_seconds": self.context.retry_after,
        }
        result.update({key: value for key, value in optional.items() if value})
        return result

    def to_agent_message(self) -> str:
        """Markdown rendering for tool responses."""
        lines = [f"**Error**: {self}"]
        if self.context.suggestion:
            lines.append(f"**Suggestion**: {self.context.suggestion}")
        if self.context.example:
            lines.append(f"**Example**: `{self.context.example}`")
        if self.retryable and self.context.retry_after:
            lines.append(f"Retry after {self.context.retry_after:.1f} seconds")
        elif self.retryable:
            lines.append("This error is retryable")
        return "\n".join(lines)


# =============================================================================
# API
# =============================================================================


class APIError(PrismicSearchError):
    default_retryable = True


class BackendRequestFailure(APIError):
    """A GraphQL round trip failed (HTTP status, transport, or ``errors`` without ``data``)."""

    default_retryable = False

    def __init__(
        self,
        message: str = "Backend request failed",
        *,
        status_code: int | None = None,
        errors: list[dict[str, Any]] | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, context=context)
        self.status_code = status_code
        self.errors = errors or []


class RateLimitError(APIError):
    default_severity = ErrorSeverity.TRANSIENT

    def __init__(
        self,
        message: str = "API rate limit exceeded",
        *,
        retry_after: float = 1.0,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = replace(context or ErrorContext(), retry_after=retry_after)
        super().__init__(message, context=ctx.with_defaults(suggestion="Wait and retry the request"))


class NetworkError(APIError):
    def __init__(self, message: str = "Network connection failed", *, context: ErrorContext | None = None) -> None:
        super().__init__(message, context=context)


class ServiceUnavailableError(APIError):
    default_severity = ErrorSeverity.TRANSIENT

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        *,
        service: str = "Prismic",
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(f"{service}: {message}", context=context)


# =============================================================================
# Schema
# =============================================================================


class SchemaUnavailableError(PrismicSearchError):
    """Introspection failed or returned an unexpected shape; search is a no-op until it succeeds."""

    category = ErrorCategory.SCHEMA
    default_severity = ErrorSeverity.TRANSIENT
    default_retryable = True

    def __init__(self, message: str = "Schema introspection failed", *, context: ErrorContext | None = None) -> None:
        super().__init__(message, context=context)


# =============================================================================
# Validation
# =============================================================================


class ValidationError(PrismicSearchError):
    category = ErrorCategory.VALIDATION
    default_severity = ErrorSeverity.WARNING


class InvalidQuerySyntaxError(ValidationError):
    def __init__(self, query: str | None, *, context: ErrorContext | None = None) -> None:
        ctx = (context or ErrorContext()).with_defaults(
            input_value=query,
            suggestion="Use comma-separated field: value pairs",
            example="first_name: Mark, last_name: Lee",
        )
        super().__init__(f"Not a search query: {query!r}", context=ctx)


class InvalidParameterError(ValidationError):
    def __init__(self, param_name: str, value: Any, expected: str, *, context: ErrorContext | None = None) -> None:
        ctx = replace(context or ErrorContext(), input_value=value, suggestion=f"Expected {expected}")
        super().__init__(f"Invalid parameter '{param_name}': {value!r} (expected {expected})", context=ctx)


# =============================================================================
# Data
# =============================================================================


class DataError(PrismicSearchError):
    category = ErrorCategory.DATA


class NoEligibleTypeError(DataError):
    """No document type has every constraint field."""

    def __init__(self, fields: list[str], *, context: ErrorContext | None = None) -> None:
        ctx = (context or ErrorContext()).with_defaults(
            input_value=fields,
            suggestion="Check field names with suggest_search_fields",
        )
        super().__init__(f"No document type has all fields: {', '.join(fields)}", context=ctx)
        self.fields = fields


class NotFoundError(DataError):
    def __init__(self, resource: str, identifier: str | None = None, *, context: ErrorContext | None = None) -> None:
        message = f"{resource} not found: {identifier}" if identifier else f"{resource} not found"
        super().__init__(message, context=context)


class ParseError(DataError):
    def __init__(self, message: str, *, source: str | None = None, context: ErrorContext | None = None) -> None:
        prefix = f"Parse error ({source})" if source else "Parse error"
        super().__init__(f"{prefix}: {message}", context=context)


# =============================================================================
# Configuration
# =============================================================================


class ConfigurationError(PrismicSearchError):
    category = ErrorCategory.CONFIGURATION
    default_severity = ErrorSeverity.CRITICAL

