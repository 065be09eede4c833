"""API routes package."""

from studyshare.api.routes import auth, categories, notes, ratings

__all__ = [
    "auth",
    "categories",
    "notes",
    "ratings",
]
