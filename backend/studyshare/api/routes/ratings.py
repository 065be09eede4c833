"""Rating routes. A user holds at most one rating per note."""

import logging

from fastapi import APIRouter, HTTPException, status

from studyshare.api.deps import CurrentUser, Storage, parse_id
from studyshare.db import MemStorage, Note, RatingUpdate
from studyshare.schemas.ratings import RatingCreate, RatingRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["ratings"])


def get_note_or_404(storage: MemStorage, raw_note_id: str) -> Note:
    note = storage.get_note(parse_id(raw_note_id, "note"))
    if note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    return note


@router.get("/{note_id}/ratings", response_model=list[RatingRead])
async def list_ratings(note_id: str, storage: Storage) -> list[RatingRead]:
    """List all ratings for a note."""
    note = get_note_or_404(storage, note_id)
    return [RatingRead.model_validate(r) for r in storage.get_ratings_by_note(note.id)]


@router.post("/{note_id}/rate", response_model=RatingRead, status_code=status.HTTP_201_CREATED)
async def rate_note(
    note_id: str,
    data: RatingCreate,
    current_user: CurrentUser,
    storage: Storage,
) -> RatingRead:
    """
    Rate a note, or replace the caller's earlier rating of it.

    A resubmission keeps the rating's id and overwrites both the score and
    the comment, so omitting the comment clears it.
    """
    note = get_note_or_404(storage, note_id)

    existing = storage.get_user_rating(current_user.id, note.id)
    if existing is not None:
        rating = storage.update_rating(
            existing.id,
            RatingUpdate(rating=data.rating, comment=data.comment),
        )
        logger.info("User %d updated rating %d on note %d", current_user.id, existing.id, note.id)
    else:
        rating = storage.create_rating(
            user_id=current_user.id,
            note_id=note.id,
            rating=data.rating,
            comment=data.comment,
        )
        logger.info("User %d rated note %d", current_user.id, note.id)

    return RatingRead.model_validate(rating)


@router.get("/{note_id}/myrating", response_model=RatingRead)
async def get_my_rating(note_id: str, current_user: CurrentUser, storage: Storage) -> RatingRead:
    """Get the caller's rating for a note."""
    note = get_note_or_404(storage, note_id)
    rating = storage.get_user_rating(current_user.id, note.id)
    if rating is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rating not found")
    return RatingRead.model_validate(rating)
