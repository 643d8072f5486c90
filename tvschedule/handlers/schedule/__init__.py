"""
TV Schedule CQRS APIs

Queries (read): scan with optional channel filter, get by id.
Commands (write): conditional create, partial update and delete.

Usage:
    read_api = ScheduleReadApi(config)
    write_api = ScheduleWriteApi(config)
"""

from .queries import ScheduleReadApi
from .commands import ScheduleWriteApi

__all__ = [
    "ScheduleReadApi",
    "ScheduleWriteApi",
]
