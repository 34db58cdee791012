"""
Teacher Forms Schemas

Pydantic schemas for submission validation and response serialization.
Responses use camelCase keys (phoneNumber, idPhotoPath, createdAt, ...).
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Re-use enum from models (works with Pydantic too)
from teacher_registry.modules.forms.models import Qualification

NAME_MAX_LENGTH = 100

# Form fields that must be present and non-blank, keyed by their wire name
REQUIRED_FORM_FIELDS = (
    "name",
    "phoneNumber",
    "qualification",
    "place",
    "governorate",
    "administration",
)
OPTIONAL_FORM_FIELDS = ("school", "comments")


class TeacherFormCreate(BaseModel):
    """Validated submission fields (everything except the uploaded photo)."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    phone_number: str = Field(..., min_length=1, max_length=50)
    qualification: Qualification
    place: str = Field(..., min_length=1, max_length=200)
    governorate: str = Field(..., min_length=1, max_length=200)
    administration: str = Field(..., min_length=1, max_length=200)
    school: str | None = Field(None, max_length=300)
    comments: str | None = None

    @field_validator("school", "comments", mode="after")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        """Optional fields submitted empty are stored as null."""
        return value or None


class TeacherFormResponse(BaseModel):
    """A stored submission as returned to admins."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: UUID
    name: str
    phone_number: str
    qualification: Qualification
    place: str
    governorate: str
    administration: str
    school: str | None = None
    id_photo_path: str
    comments: str | None = None
    created_at: datetime
    updated_at: datetime


class MessageResponse(BaseModel):
    """Plain acknowledgement or error body."""

    message: str
