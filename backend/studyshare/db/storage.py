"""
In-memory entity store for users, categories, notes and ratings.

Key patterns:
1. One MemStorage instance per application, created by the app factory
2. Ids come from per-collection counters starting at 1 and are never reused
3. "Not found" is reported as None, never raised - handlers pick the status code

The store does not enforce uniqueness of usernames/emails or the
one-rating-per-user-per-note rule; callers check first and route accordingly.
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from itertools import count

from studyshare.db.models import KEEP, Category, Note, Rating, RatingUpdate, User

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: list[dict[str, str]] = [
    {"name": "Computer Science", "color": "blue", "icon": "computer-line"},
    {"name": "Mathematics", "color": "green", "icon": "calculator-line"},
    {"name": "Business", "color": "yellow", "icon": "briefcase-line"},
    {"name": "Engineering", "color": "purple", "icon": "tools-line"},
    {"name": "Medicine", "color": "pink", "icon": "heart-pulse-line"},
    {"name": "Sciences", "color": "indigo", "icon": "flask-line"},
]


class MemStorage:
    """Authoritative registry of all entity records."""

    def __init__(self, seed_categories: bool = True):
        self._users: dict[int, User] = {}
        self._categories: dict[int, Category] = {}
        self._notes: dict[int, Note] = {}
        self._ratings: dict[int, Rating] = {}

        self._user_ids = count(1)
        self._category_ids = count(1)
        self._note_ids = count(1)
        self._rating_ids = count(1)

        if seed_categories:
            for category in DEFAULT_CATEGORIES:
                self.create_category(**category)

    # =========================================================================
    # USERS
    # =========================================================================

    def get_user(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def get_user_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def create_user(self, *, username: str, password: str, display_name: str, email: str) -> User:
        """Store a new user. `password` must already be hashed."""
        user = User(
            id=next(self._user_ids),
            username=username,
            password=password,
            display_name=display_name,
            email=email,
            profile_image=None,
        )
        self._users[user.id] = user
        return user

    # =========================================================================
    # CATEGORIES
    # =========================================================================

    def get_categories(self) -> list[Category]:
        """All categories in insertion order."""
        return list(self._categories.values())

    def get_category(self, category_id: int) -> Category | None:
        return self._categories.get(category_id)

    def create_category(self, *, name: str, color: str, icon: str) -> Category:
        category = Category(id=next(self._category_ids), name=name, color=color, icon=icon)
        self._categories[category.id] = category
        return category

    # =========================================================================
    # NOTES
    # =========================================================================

    def get_notes(self) -> list[Note]:
        return list(self._notes.values())

    def get_notes_by_category(self, category_id: int) -> list[Note]:
        return [n for n in self._notes.values() if n.category_id == category_id]

    def get_notes_by_user(self, user_id: int) -> list[Note]:
        return [n for n in self._notes.values() if n.user_id == user_id]

    def get_note(self, note_id: int) -> Note | None:
        return self._notes.get(note_id)

    def create_note(
        self,
        *,
        title: str,
        description: str,
        file_name: str,
        file_size: int,
        file_type: str,
        user_id: int,
        category_id: int,
    ) -> Note:
        """Store a new note stamped with the current time and zeroed counters."""
        note = Note(
            id=next(self._note_ids),
            title=title,
            description=description,
            file_name=file_name,
            file_size=file_size,
            file_type=file_type,
            upload_date=datetime.now(timezone.utc),
            user_id=user_id,
            category_id=category_id,
            downloads=0,
            views=0,
        )
        self._notes[note.id] = note
        return note

    def discard_note(self, note_id: int) -> None:
        """
        Drop a note whose upload never completed.

        Only used to roll back a note record when its file could not be
        written. The id is not handed out again.
        """
        if self._notes.pop(note_id, None) is not None:
            logger.warning("Discarded note %d after failed upload", note_id)

    def increment_note_views(self, note_id: int) -> Note | None:
        note = self._notes.get(note_id)
        if note is None:
            return None
        updated = replace(note, views=note.views + 1)
        self._notes[note_id] = updated
        return updated

    def increment_note_downloads(self, note_id: int) -> Note | None:
        note = self._notes.get(note_id)
        if note is None:
            return None
        updated = replace(note, downloads=note.downloads + 1)
        self._notes[note_id] = updated
        return updated

    # =========================================================================
    # RATINGS
    # =========================================================================

    def get_ratings_by_note(self, note_id: int) -> list[Rating]:
        return [r for r in self._ratings.values() if r.note_id == note_id]

    def get_user_rating(self, user_id: int, note_id: int) -> Rating | None:
        return next(
            (r for r in self._ratings.values() if r.user_id == user_id and r.note_id == note_id),
            None,
        )

    def create_rating(self, *, user_id: int, note_id: int, rating: int, comment: str | None = None) -> Rating:
        """Store a new rating. Callers check get_user_rating() first."""
        record = Rating(
            id=next(self._rating_ids),
            user_id=user_id,
            note_id=note_id,
            rating=rating,
            comment=comment,
        )
        self._ratings[record.id] = record
        return record

    def update_rating(self, rating_id: int, update: RatingUpdate) -> Rating | None:
        """
        Apply the set fields of `update` to an existing rating.

        Fields left at KEEP retain their current value.
        """
        record = self._ratings.get(rating_id)
        if record is None:
            return None
        changes = {
            name: value
            for name, value in (("rating", update.rating), ("comment", update.comment))
            if value is not KEEP
        }
        updated = replace(record, **changes)
        self._ratings[rating_id] = updated
        return updated
