# Base exception
from .base import TVScheduleError

# Domain exceptions
from .domain_exceptions import (
    ValidationError,
    ItemNotFoundError,
    ConflictError,
    ConnectionError,
    RetryableError,
)

__all__ = [
    "TVScheduleError",
    "ConflictError",
    "ConnectionError",
    "ItemNotFoundError",
    "RetryableError",
    "ValidationError",
]
