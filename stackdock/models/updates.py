"""
Request models for creating and patching records.

Each update type lists only the fields a caller may patch. Fields left unset
are not merged, so ``StackUpdate(name="Books")`` changes the name and nothing
else. Card membership is deliberately absent from CardUpdate: it changes only
through ``move_card``.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from stackdock.models.base import CoverType, validate_name


class _Patch(BaseModel):
    model_config = ConfigDict(extra="forbid")

    @field_validator("name", "cover", "cover_type", check_fields=False)
    @classmethod
    def check_required(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            raise ValueError(f"{info.field_name} cannot be cleared.")
        if info.field_name == "name":
            return validate_name(v)
        return v

    def changes(self) -> Dict[str, Any]:
        """Return only the fields the caller explicitly set."""
        return self.model_dump(exclude_unset=True)


class StackUpdate(_Patch):
    """Patchable stack fields."""

    name: Optional[str] = None
    cover: Optional[str] = None
    cover_type: Optional[CoverType] = None


class CardUpdate(_Patch):
    """Patchable card fields."""

    name: Optional[str] = None
    description: Optional[str] = None
    cover: Optional[str] = None


class NewCard(BaseModel):
    """Fields supplied by the caller when creating a card.

    When cover is omitted, a placeholder image is generated from the name.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    stack_id: str
    description: Optional[str] = None
    cover: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return validate_name(v)
