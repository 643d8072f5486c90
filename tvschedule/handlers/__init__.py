"""
Handler layer: read and write APIs over the schedule table.

Architecture:
app (Lambda adapters) -> handlers/ (this layer) -> core/ (gateway) -> DynamoDB
"""

from .schedule.queries import ScheduleReadApi
from .schedule.commands import ScheduleWriteApi

__all__ = [
    'ScheduleReadApi',
    'ScheduleWriteApi',
]
