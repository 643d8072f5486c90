"""
Write-side DTOs for the schedule table.

These models validate inbound request bodies before anything reaches
DynamoDB:
- ProgrammeCreate: body of a create request
- ProgrammeUpdate: record id plus the fields of a partial update
- ChannelFilter: optional channel criterion of a list request
"""

import re
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .domain_models import KEY_FIELD

# Field names become "#name" / ":name" placeholders
_PLACEHOLDER_SAFE = re.compile(r"[A-Za-z0-9_]+")

REQUIRED_CREATE_FIELDS = ("title", "channel", "time")


class ProgrammeCreate(BaseModel):
    """
    Create request for a programme.

    ``title``, ``channel`` and ``time`` are required. ``id`` may be supplied by
    the caller; when absent the write API generates one. Any other
    attributes pass through untouched.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(None, min_length=1, description="Optional caller-supplied identifier")
    title: str = Field(..., min_length=1, description="Programme title")
    channel: str = Field(..., min_length=1, description="Broadcasting channel")
    time: str = Field(..., min_length=1, description="Start time")


class ProgrammeUpdate(BaseModel):
    """
    Partial update of a single programme.

    ``fields`` never contains the record key: ``from_body`` strips it out and
    uses it as ``id`` instead.
    """

    id: str = Field(..., min_length=1, description="Identifier of the programme to update")
    fields: Dict[str, Any] = Field(..., description="Field names mapped to replacement values")

    @field_validator('fields')
    @classmethod
    def validate_fields(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        if not v:
            raise ValueError("At least one field to update is required")
        bad_names = [name for name in v if not _PLACEHOLDER_SAFE.fullmatch(name)]
        if bad_names:
            raise ValueError(
                f"Field names may only contain letters, digits and underscores: {bad_names}"
            )
        return v

    @model_validator(mode='after')
    def validate_key_not_updated(self) -> 'ProgrammeUpdate':
        if KEY_FIELD in self.fields:
            raise ValueError(f"'{KEY_FIELD}' addresses the record and cannot be updated")
        return self

    @classmethod
    def from_body(cls, body: Dict[str, Any]) -> 'ProgrammeUpdate':
        """Split a request body into the record id and the fields to update."""
        fields = {k: v for k, v in body.items() if k != KEY_FIELD}
        return cls(id=body.get(KEY_FIELD), fields=fields)


class ChannelFilter(BaseModel):
    """Optional channel criterion for listing programmes."""

    channel: Optional[str] = Field(None, description="Channel name to match exactly")

    @field_validator('channel')
    @classmethod
    def blank_means_no_filter(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    def to_filters(self) -> Dict[str, Any]:
        """Attribute/value pairs for build_filter_expression."""
        return {'channel': self.channel} if self.channel else {}
