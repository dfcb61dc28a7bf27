"""
Entity models for stackdock.

Stacks are named collections; every card belongs to exactly one stack.
Records are immutable: the engine replaces a record with a modified copy
instead of editing it in place.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from stackdock.constants import (
    STATUS_ERROR,
    STATUS_IDLE,
    STATUS_SYNCING,
    VALIDATION_NAME_REQUIRED,
)
from stackdock.utils import new_id


class CoverType(str, Enum):
    """How a stack cover string should be rendered."""

    IMAGE = "image"
    GRADIENT = "gradient"
    COLOR = "color"


class SyncStatus(str, Enum):
    """Engine-wide synchronization status."""

    IDLE = STATUS_IDLE
    SYNCING = STATUS_SYNCING
    ERROR = STATUS_ERROR


def validate_name(v: str) -> str:
    """Strip a display name and reject empty values."""
    v = v.strip()
    if not v:
        raise ValueError(VALIDATION_NAME_REQUIRED)
    return v


class BaseRecord(BaseModel):
    """
    Common base for stacks and cards.

    Common fields:
    - id: Unique identifier, never reused
    - name: Display name (non-empty)
    - cover: Rendering hint for the record's artwork
    - timestamps: created_at, updated_at
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    name: str
    cover: str
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="before")
    @classmethod
    def single_creation_time(cls, data: Any) -> Any:
        """A new record starts with updated_at equal to created_at."""
        if isinstance(data, dict) and data.get("updated_at") is None:
            created = data.get("created_at") or datetime.now()
            data = {**data, "created_at": created, "updated_at": created}
        return data

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        """Validate name is non-empty."""
        return validate_name(v)

    def touched(self, **changes) -> "BaseRecord":
        """Return a copy with changes applied and updated_at bumped.

        updated_at never moves backwards, even if the clock does.
        """
        now = datetime.now()
        changes["updated_at"] = max(now, self.updated_at)
        return self.model_copy(update=changes)


class Stack(BaseRecord):
    """Stack model - a named collection of cards."""

    cover_type: CoverType = CoverType.GRADIENT


class Card(BaseRecord):
    """Card model - an item belonging to exactly one stack.

    stack_id changes only through the move operation.
    """

    description: Optional[str] = None
    stack_id: str
