"""User schemas."""

from pydantic import EmailStr, Field

from studyshare.schemas.base import BaseSchema, IDMixin


class UserCreate(BaseSchema):
    """Schema for registering a user."""

    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=128)
    display_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr


class UserRead(BaseSchema, IDMixin):
    """Schema for reading user data. Never carries the password credential."""

    username: str
    display_name: str
    email: str
    profile_image: str | None = None
