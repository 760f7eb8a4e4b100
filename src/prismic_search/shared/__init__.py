"""
Shared kernel: exception hierarchy and async helpers used by every layer.
"""

from .async_utils import CircuitBreaker, CircuitState
from .exceptions import (
    APIError,
    BackendRequestFailure,
    ConfigurationError,
    DataError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    InvalidParameterError,
    InvalidQuerySyntaxError,
    NetworkError,
    NoEligibleTypeError,
    NotFoundError,
    ParseError,
    PrismicSearchError,
    RateLimitError,
    SchemaUnavailableError,
    ServiceUnavailableError,
    ValidationError,
)

__all__ = [
    # Base
    "PrismicSearchError",
    "ErrorContext",
    "ErrorSeverity",
    "ErrorCategory",
    # API errors
    "APIError",
    "BackendRequestFailure",
    "RateLimitError",
    "NetworkError",
    "ServiceUnavailableError",
    # Schema errors
    "SchemaUnavailableError",
    # Validation errors
    "ValidationError",
    "InvalidQuerySyntaxError",
    "InvalidParameterError",
    # Data errors
    "DataError",
    "NoEligibleTypeError",
    "NotFoundError",
    "ParseError",
    # Configuration errors
    "ConfigurationError",
    # Async helpers
    "CircuitBreaker",
    "CircuitState",
]
