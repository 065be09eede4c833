"""
Note routes: browse, upload and download.

Endpoints:
- GET /notes - All notes
- GET /notes/category/{category_id} - Notes in a category
- GET /notes/user/{user_id} - Notes uploaded by a user
- GET /notes/{note_id} - Note details (counts a view)
- POST /notes - Upload a document (multipart)
- GET /notes/{note_id}/download - Stream the file (counts a download)
"""

import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status
from fastapi.responses import FileResponse

from studyshare.api.deps import AppSettings, CurrentUser, Files, Storage, parse_id
from studyshare.config import sanitize_error
from studyshare.schemas.notes import NoteRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["notes"])


def require_text(value: str, label: str, min_length: int) -> str:
    """Strip a form field and 400 unless at least `min_length` characters remain."""
    value = value.strip()
    if len(value) < min_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{label} must be at least {min_length} characters",
        )
    return value


# =============================================================================
# BROWSING
# =============================================================================


@router.get("", response_model=list[NoteRead])
async def list_notes(storage: Storage) -> list[NoteRead]:
    """List every note in upload order."""
    return [NoteRead.model_validate(n) for n in storage.get_notes()]


@router.get("/category/{category_id}", response_model=list[NoteRead])
async def list_notes_by_category(category_id: str, storage: Storage) -> list[NoteRead]:
    """List notes in a category. Unknown categories are a 404, not an empty list."""
    cid = parse_id(category_id, "category")
    if storage.get_category(cid) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return [NoteRead.model_validate(n) for n in storage.get_notes_by_category(cid)]


@router.get("/user/{user_id}", response_model=list[NoteRead])
async def list_notes_by_user(user_id: str, storage: Storage) -> list[NoteRead]:
    """List notes uploaded by a user."""
    uid = parse_id(user_id, "user")
    if storage.get_user(uid) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return [NoteRead.model_validate(n) for n in storage.get_notes_by_user(uid)]


@router.get("/{note_id}", response_model=NoteRead)
async def get_note(note_id: str, storage: Storage) -> NoteRead:
    """Get a note and count the view."""
    nid = parse_id(note_id, "note")
    note = storage.increment_note_views(nid)
    if note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    return NoteRead.model_validate(note)


# =============================================================================
# UPLOAD
# =============================================================================


@router.post("", response_model=NoteRead, status_code=status.HTTP_201_CREATED)
async def upload_note(
    current_user: CurrentUser,
    storage: Storage,
    files: Files,
    settings: AppSettings,
    title: Annotated[str, Form(max_length=255)],
    description: Annotated[str, Form()],
    category_id: Annotated[int, Form(alias="categoryId")],
    file: Annotated[UploadFile | None, File()] = None,
) -> NoteRead:
    """
    Upload a document and create its note.

    Flow:
    1. Validate form fields, category, file presence, type and size
    2. Create the note record (assigns the id used in the file name)
    3. Write the file to disk; on failure drop the note again and 500

    Nothing is stored unless every check in step 1 passes.
    """
    title = require_text(title, "Title", 3)
    description = require_text(description, "Description", 10)

    if file is None or not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    if file.content_type not in settings.allowed_upload_types:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid file type. Only PDF, Word and PowerPoint files are allowed",
        )

    if file.size is not None and file.size > settings.max_upload_size_bytes:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File too large")
    data = await file.read()
    if len(data) > settings.max_upload_size_bytes:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File too large")

    if storage.get_category(category_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid category ID")

    note = storage.create_note(
        title=title,
        description=description,
        file_name=file.filename,
        file_size=len(data),
        file_type=file.content_type,
        user_id=current_user.id,
        category_id=category_id,
    )

    try:
        await files.save_file(data, file.filename, note.id)
    except OSError as e:
        logger.error("Failed to save file for note %d: %s", note.id, str(e), exc_info=True)
        storage.discard_note(note.id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=sanitize_error(e, generic_message="Failed to save uploaded file.", settings=settings),
        )

    logger.info("User %d uploaded note %d (%s, %d bytes)", current_user.id, note.id, note.file_name, note.file_size)
    return NoteRead.model_validate(note)


# =============================================================================
# DOWNLOAD
# =============================================================================


@router.get("/{note_id}/download", response_class=FileResponse)
async def download_note(note_id: str, storage: Storage, files: Files) -> FileResponse:
    """
    Stream a note's file as an attachment and count the download.

    404 if the note is unknown, or its file was never saved or has gone
    missing from disk. Neither case touches the download counter.
    """
    nid = parse_id(note_id, "note")
    note = storage.get_note(nid)
    if note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")

    path = files.get_file_path(nid)
    if path is None or not path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")

    storage.increment_note_downloads(nid)
    return FileResponse(path, media_type=note.file_type, filename=note.file_name)
