"""
Models for the TV schedule service.

- domain_models: the stored Programme record
- dtos: validated request payloads (create, partial update, channel filter)
"""

from .domain_models import KEY_FIELD, Programme, generate_programme_id
from .dtos import REQUIRED_CREATE_FIELDS, ChannelFilter, ProgrammeCreate, ProgrammeUpdate

__all__ = [
    "KEY_FIELD",
    "Programme",
    "generate_programme_id",
    "REQUIRED_CREATE_FIELDS",
    "ChannelFilter",
    "ProgrammeCreate",
    "ProgrammeUpdate",
]
