"""Authentication schemas."""

from pydantic import Field

from studyshare.schemas.base import BaseSchema


class LoginRequest(BaseSchema):
    """Request schema for username/password login."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
