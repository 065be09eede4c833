"""
Record types held by the in-memory store.

Records are frozen dataclasses: the store replaces a record on update
instead of mutating it, so a reference handed out earlier never changes
under the caller.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


@dataclass(frozen=True)
class User:
    """Registered account. `password` holds the salted scrypt credential."""

    id: int
    username: str
    password: str
    display_name: str
    email: str
    profile_image: str | None = None


@dataclass(frozen=True)
class Category:
    """Fixed classification tag for notes."""

    id: int
    name: str
    color: str
    icon: str


@dataclass(frozen=True)
class Note:
    """Metadata of an uploaded document."""

    id: int
    title: str
    description: str
    file_name: str
    file_size: int
    file_type: str
    upload_date: datetime
    user_id: int
    category_id: int
    downloads: int = 0
    views: int = 0


@dataclass(frozen=True)
class Rating:
    """One user's 1-5 score (and optional comment) for one note."""

    id: int
    user_id: int
    note_id: int
    rating: int
    comment: str | None = None


class Keep(Enum):
    """Marker for an update field that should keep its stored value."""

    KEEP = "keep"


KEEP = Keep.KEEP


@dataclass(frozen=True)
class RatingUpdate:
    """
    Fields that may change when a user re-rates a note.

    A field left at KEEP is not touched; `comment=None` clears the comment.
    """

    rating: int | Keep = KEEP
    comment: str | None | Keep = KEEP
