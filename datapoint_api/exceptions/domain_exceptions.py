"""
Domain-Specific Exceptions for the Data Point API

All exceptions extend DataPointApiError and carry the original error plus
a context dictionary for logging.

Organized by category:
1. Input Validation Errors
2. Store Errors (mapped from botocore ClientError codes)
3. Read Path Errors
4. Write Pipeline Errors
"""

from typing import Any, Dict, Optional

from .base import DataPointApiError


# =============================================================================
# Input Validation Errors
# =============================================================================

class ValidationError(DataPointApiError):
    """Raised when input or stored data fails validation.

    Used for:
    - Pydantic validation failures on resolver arguments and DTOs
    - DynamoDB ValidationException responses
    - Items that cannot be converted into a DataPoint
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {
            'validation_errors': self.errors
        } if self.errors else {}
        super().__init__(message, original_error, context)


class UnsupportedFilterOperatorError(ValidationError):
    """Raised in strict mode when a range filter names an unknown operator."""

    def __init__(self, operator: str, supported: Optional[list] = None):
        self.operator = operator
        self.supported = supported or []
        message = f"Unsupported range filter operator '{operator}'"
        if self.supported:
            message += f". Supported operators: {', '.join(self.supported)}"
        super().__init__(message, errors={'operator': operator})


# =============================================================================
# Store Errors
# =============================================================================

class ConflictError(DataPointApiError):
    """Raised when a conditional write fails because the key already exists.

    Used for:
    - ConditionalCheckFailedException from the create PutItem
    """

    def __init__(self, message: str, resource_id: Optional[str] = None, original_error: Optional[Exception] = None):
        """Initialize conflict error.

        Args:
            message: Human-readable error message
            resource_id: Key of the conflicting record (e.g., "u1#d1")
            original_error: The original exception that caused this error
        """
        self.resource_id = resource_id
        context = {}
        if resource_id:
            context['resource_id'] = resource_id
        super().__init__(message, original_error, context)


class ConnectionError(DataPointApiError):
    """Raised when the store cannot be reached or refuses the caller.

    Used for:
    - Network connectivity issues and invalid endpoints
    - Credential and authorization failures against AWS
    - Missing tables
    - Unknown DynamoDB error codes
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


class RetryableError(DataPointApiError):
    """Raised when the store reports a temporary failure.

    Used for:
    - ProvisionedThroughputExceededException and throttling
    - Temporary service unavailability
    - Request timeouts

    Nothing in this package retries; the error type tells the caller that a
    later attempt may succeed.
    """

    def __init__(self, message: str, retry_after_seconds: Optional[int] = None, original_error: Optional[Exception] = None):
        self.retry_after_seconds = retry_after_seconds
        context = {}
        if retry_after_seconds:
            context['retry_after_seconds'] = retry_after_seconds
        super().__init__(message, original_error, context)


# =============================================================================
# Read Path Errors
# =============================================================================

class MalformedCursorError(DataPointApiError):
    """Raised when a pagination token cannot be decoded.

    CursorCodec.decode recovers from this error and restarts at the beginning
    of the partition; only decode_or_raise lets it escape.
    """

    def __init__(self, message: str, token: Optional[str] = None, original_error: Optional[Exception] = None):
        self.token = token
        context = {}
        if token is not None:
            # Tokens can be long; a prefix is enough to correlate log lines
            context['token_prefix'] = token[:16]
        super().__init__(message, original_error, context)


class QueryFailedError(DataPointApiError):
    """Raised in strict mode when the partition query fails at the store."""

    def __init__(self, message: str, partition_key: Optional[str] = None, original_error: Optional[Exception] = None):
        self.partition_key = partition_key
        context = {}
        if partition_key:
            context['partition_key'] = partition_key
        super().__init__(message, original_error, context)


# =============================================================================
# Write Pipeline Errors
# =============================================================================

class WriteFailedError(DataPointApiError):
    """Raised when the mutation step of a pipeline cannot persist its record."""

    def __init__(self, message: str, resource_id: Optional[str] = None, original_error: Optional[Exception] = None):
        self.resource_id = resource_id
        context = {}
        if resource_id:
            context['resource_id'] = resource_id
        super().__init__(message, original_error, context)


class UnauthorizedError(DataPointApiError):
    """Raised when the authorization gate denies a pipeline invocation."""

    def __init__(self, message: str = "Not authorized to perform this operation", step: Optional[str] = None):
        self.step = step
        context = {}
        if step:
            context['step'] = step
        super().__init__(message, None, context)
