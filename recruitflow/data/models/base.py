"""
Base model classes for RecruitFlow data models.

Provides common fields and functionality shared across all models.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, ClassVar

from bson import ObjectId
from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)


def _strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


# Required free text: surrounding whitespace removed, empty rejected
NonBlankStr = Annotated[str, AfterValidator(_strip_required)]


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def generate_id() -> str:
    """New record identifier (string form of a BSON ObjectId, sortable by creation)."""
    return str(ObjectId())


class TimestampMixin(BaseModel):
    """Mixin providing timestamp fields for models."""

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class BaseDocument(TimestampMixin):
    """
    Base document model for stored entities.

    Provides common fields and configuration for all persisted records.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        validate_assignment=True,
    )

    id: str = Field(default_factory=generate_id, alias="_id", min_length=1)

    def model_dump_store(self) -> dict[str, Any]:
        """Convert model to a store document keyed by ``_id``."""
        return self.model_dump(by_alias=True, exclude_none=True)


class EmbeddedModel(BaseModel):
    """
    Base model for embedded documents (subdocuments).

    Use this for models that are embedded within other documents
    rather than stored in their own collection.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )


class PatchModel(BaseModel):
    """
    Base for merge-patch update schemas.

    Unknown fields are rejected so immutable fields (ids, system-generated
    links) can never slip into a patch. An explicit ``None`` clears a field
    listed in ``nullable_fields`` and is rejected for any other field.
    """

    model_config = ConfigDict(extra="forbid", use_enum_values=True)

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name not in cls.nullable_fields:
            raise ValueError("cannot be cleared")
        return value

    def to_patch(self) -> dict[str, Any]:
        """Only the fields the caller actually supplied, explicit ``None`` included."""
        return self.model_dump(exclude_unset=True)
