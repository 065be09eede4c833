"""Pydantic schemas for API request/response validation."""

from studyshare.schemas.base import MessageResponse
from studyshare.schemas.user import UserCreate, UserRead
from studyshare.schemas.auth import LoginRequest
from studyshare.schemas.categories import CategoryRead
from studyshare.schemas.notes import NoteRead
from studyshare.schemas.ratings import RatingCreate, RatingRead

__all__ = [
    "MessageResponse",
    # User
    "UserCreate",
    "UserRead",
    # Auth
    "LoginRequest",
    # Categories
    "CategoryRead",
    # Notes
    "NoteRead",
    # Ratings
    "RatingCreate",
    "RatingRead",
]
