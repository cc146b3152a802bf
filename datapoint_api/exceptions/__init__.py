# Base exception class
from .base import DataPointApiError

from .domain_exceptions import (
    ValidationError,
    UnsupportedFilterOperatorError,
    ConflictError,
    ConnectionError,
    RetryableError,
    MalformedCursorError,
    QueryFailedError,
    WriteFailedError,
    UnauthorizedError,
)

__all__ = [
    # Base exception
    "DataPointApiError",

    # Domain exceptions (alphabetically ordered)
    "ConflictError",
    "ConnectionError",
    "MalformedCursorError",
    "QueryFailedError",
    "RetryableError",
    "UnauthorizedError",
    "UnsupportedFilterOperatorError",
    "ValidationError",
    "WriteFailedError",
]
