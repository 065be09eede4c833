"""
Authentication Routes

Endpoints:
- POST /register - Create an account and log it in
- POST /login - Exchange username/password for a session
- POST /logout - Destroy the session
- GET /user - Get the current user

Session Flow:
1. Register or login succeeds -> SessionStore creates a session
2. Signed session id is returned in an HttpOnly cookie
3. Later requests resolve the cookie back to the session and its user
4. Logout destroys the session server-side and clears the cookie

Security:
- Passwords are stored as salted scrypt hashes, never returned
- Login failures look identical whether the user exists or not
"""

import logging

from fastapi import APIRouter, HTTPException, Response, status
from fastapi.concurrency import run_in_threadpool

from studyshare.api.deps import (
    AppSettings,
    CurrentSession,
    CurrentUser,
    Sessions,
    Storage,
    clear_session_cookie,
    set_session_cookie,
)
from studyshare.db import MemStorage
from studyshare.schemas.auth import LoginRequest
from studyshare.schemas.base import MessageResponse
from studyshare.schemas.user import UserCreate, UserRead
from studyshare.services.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def ensure_available(storage: MemStorage, data: UserCreate) -> None:
    """Raise 400 if the username or email is already registered."""
    if storage.get_user_by_username(data.username) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists",
        )
    if storage.get_user_by_email(data.email) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already exists",
        )


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register(
    data: UserCreate,
    response: Response,
    storage: Storage,
    sessions: Sessions,
    settings: AppSettings,
) -> UserRead:
    """
    Register a new user and start a session for them.

    Username is checked before email; either clash is a 400. The checks
    repeat after hashing, with no await between them and create_user.
    """
    ensure_available(storage, data)
    hashed = await run_in_threadpool(hash_password, data.password)
    ensure_available(storage, data)
    user = storage.create_user(
        username=data.username,
        password=hashed,
        display_name=data.display_name,
        email=data.email,
    )
    logger.info("Registered user %d (%s)", user.id, user.username)

    session = sessions.create(user.id)
    set_session_cookie(response, session, settings)
    return UserRead.model_validate(user)


@router.post("/login", response_model=UserRead)
async def login(
    data: LoginRequest,
    response: Response,
    storage: Storage,
    sessions: Sessions,
    settings: AppSettings,
) -> UserRead:
    """Verify credentials and start a session."""
    user = storage.get_user_by_username(data.username)
    if user is None or not await run_in_threadpool(verify_password, data.password, user.password):
        logger.info("Failed login attempt for username %r", data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    session = sessions.create(user.id)
    set_session_cookie(response, session, settings)
    return UserRead.model_validate(user)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    session: CurrentSession,
    sessions: Sessions,
    settings: AppSettings,
) -> MessageResponse:
    """
    Destroy the current session, if any, and clear the cookie.

    Calling this without a session is not an error.
    """
    if session is not None:
        sessions.destroy(session.id)
    clear_session_cookie(response, settings)
    return MessageResponse(message="Logged out")


@router.get("/user", response_model=UserRead)
async def get_user(current_user: CurrentUser) -> UserRead:
    """Get the current authenticated user's profile."""
    return UserRead.model_validate(current_user)
