"""
Domain model for a scheduled TV programme.

A programme is an open record: ``id``, ``title``, ``channel`` and ``time``
are always present, and any other attributes a client sends (``duration``,
``genre``, ...) are kept and stored alongside them.
"""

import uuid
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

# Primary key attribute of the schedule table
KEY_FIELD = "id"


def generate_programme_id() -> str:
    """Generate a random unique programme id."""
    return str(uuid.uuid4())


class Programme(BaseModel):
    """A single entry in the TV schedule."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(default_factory=generate_programme_id, min_length=1, description="Unique programme identifier")
    title: str = Field(..., min_length=1, description="Programme title")
    channel: str = Field(..., min_length=1, description="Broadcasting channel, e.g. BBC1")
    time: str = Field(..., min_length=1, description="Start time, e.g. 22:20")

    def to_item(self) -> Dict[str, Any]:
        """Dump to a DynamoDB item, extra attributes included."""
        return self.model_dump(exclude_none=True)
