"""
Domain exceptions for the TV schedule service.

Each class carries the HTTP status the Lambda adapter answers with:
1. Client errors - ValidationError (400), ItemNotFoundError (404),
   ConflictError (409)
2. Server errors - ConnectionError, RetryableError (500)
"""

from typing import Any, Dict, Optional

from .base import TVScheduleError


# =============================================================================
# Client Errors
# =============================================================================

class ValidationError(TVScheduleError):
    """Raised when a request payload fails validation.

    Used for:
    - Malformed JSON bodies
    - Missing required fields (title, channel, time, id)
    - Empty partial updates
    - Field names that cannot be used as expression placeholders
    """

    status_code = 400

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {}
        if self.errors:
            context['validation_errors'] = self.errors
        super().__init__(message, original_error, context)


class ItemNotFoundError(TVScheduleError):
    """Raised when the addressed programme does not exist in the table."""

    status_code = 404

    def __init__(self, table_name: str, key: dict, original_error: Optional[Exception] = None):
        self.table_name = table_name
        self.key = key
        message = f"Item not found in table '{table_name}' with key: {key}"
        context = {
            'table_name': table_name,
            'key': key
        }
        super().__init__(message, original_error, context, programme_id=key.get('id'))


class ConflictError(TVScheduleError):
    """Raised when a conditional write fails.

    The write API translates existence-check failures into ItemNotFoundError;
    anything left as ConflictError is a genuine concurrent-write conflict.
    """

    status_code = 409

    def __init__(self, message: str, resource_id: Optional[str] = None, original_error: Optional[Exception] = None):
        self.resource_id = resource_id
        context = {}
        if resource_id:
            context['resource_id'] = resource_id
        super().__init__(message, original_error, context)


# =============================================================================
# Server Errors
# =============================================================================

class ConnectionError(TVScheduleError):
    """Raised when DynamoDB cannot be reached or rejects our credentials."""

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


class RetryableError(TVScheduleError):
    """Raised for throttling and transient service failures."""

    def __init__(self, message: str, retry_after_seconds: Optional[int] = None, original_error: Optional[Exception] = None):
        self.retry_after_seconds = retry_after_seconds
        context = {}
        if retry_after_seconds:
            context['retry_after_seconds'] = retry_after_seconds
        super().__init__(message, original_error, context)
