"""Rating schemas."""

from pydantic import Field, field_validator

from studyshare.schemas.base import BaseSchema, IDMixin


class RatingCreate(BaseSchema):
    """Schema for rating a note. Resubmitting replaces the earlier rating."""

    rating: int = Field(..., ge=1, le=5)
    comment: str | None = Field(None, max_length=2000)

    @field_validator("comment")
    @classmethod
    def blank_comment_is_none(cls, value: str | None) -> str | None:
        return value or None


class RatingRead(BaseSchema, IDMixin):
    """Schema for reading rating data."""

    user_id: int
    note_id: int
    rating: int
    comment: str | None
