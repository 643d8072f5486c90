from typing import Any, Dict, Optional


class TVScheduleError(Exception):
    """Base exception for all TV schedule service errors.

    Attributes:
        message: Human-readable error message
        original_error: The original exception that caused this error (if any)
        context: Additional context information about the error
        status_code: HTTP status the Lambda adapter answers with
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None,
        programme_id: Optional[str] = None
    ):
        self.message = message
        self.original_error = original_error
        self.context = dict(context or {})
        if programme_id is not None:
            self.context.setdefault('programme_id', programme_id)
        super().__init__(message)

    @property
    def programme_id(self) -> Optional[str]:
        """Id of the programme the failed operation addressed, if known."""
        return self.context.get('programme_id')

    @property
    def aws_error_code(self) -> Optional[str]:
        """DynamoDB error code of the wrapped botocore ClientError, if any."""
        response = getattr(self.original_error, 'response', None)
        if not isinstance(response, dict):
            return None
        return response.get('Error', {}).get('Code')

    def __str__(self) -> str:
        error_str = self.message
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            error_str += f" (Context: {context_str})"
        return error_str

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(message={self.message!r}, status_code={self.status_code}, "
            f"original_error={self.original_error!r}, context={self.context!r})"
        )
