"""
TV Schedule

A small CRUD service for a TV schedule held in a single DynamoDB table,
exposed as an AWS Lambda behind API Gateway. Built on boto3 and Pydantic,
with separate read and write APIs over a thin table gateway.
"""

from .config import ScheduleConfig
from .exceptions import (
    ConflictError,
    ConnectionError,
    ItemNotFoundError,
    RetryableError,
    TVScheduleError,
    ValidationError,
)
from .models import (
    ChannelFilter,
    Programme,
    ProgrammeCreate,
    ProgrammeUpdate,
)
from .core import (
    TableGateway,
    create_table_gateway,
)
from .handlers import (
    ScheduleReadApi,
    ScheduleWriteApi,
)
from .utils import build_update_expression

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "ScheduleConfig",

    # Exceptions
    "ConflictError",
    "ConnectionError",
    "ItemNotFoundError",
    "RetryableError",
    "TVScheduleError",
    "ValidationError",

    # Models
    "ChannelFilter",
    "Programme",
    "ProgrammeCreate",
    "ProgrammeUpdate",

    # Gateway
    "TableGateway",
    "create_table_gateway",

    # Read/write APIs
    "ScheduleReadApi",
    "ScheduleWriteApi",

    # Expression building
    "build_update_expression",
]
