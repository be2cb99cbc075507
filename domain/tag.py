"""Tag records."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class TagType(str, Enum):
    LOCATION = "LOCATION"
    CATEGORY = "CATEGORY"
    CONTEXT = "CONTEXT"
    PERSON = "PERSON"
    CUSTOM = "CUSTOM"


class Tag(BaseModel):
    """Label attached to tasks."""

    id: int = 0
    name: str
    type: TagType = TagType.CUSTOM
