"""In-memory entity store."""

from studyshare.db.models import KEEP, Category, Note, Rating, RatingUpdate, User
from studyshare.db.storage import DEFAULT_CATEGORIES, MemStorage

__all__ = [
    "KEEP",
    "Category",
    "DEFAULT_CATEGORIES",
    "MemStorage",
    "Note",
    "Rating",
    "RatingUpdate",
    "User",
]
