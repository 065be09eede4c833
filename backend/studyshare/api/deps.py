"""
FastAPI Dependencies for stores, settings and authentication.

Key patterns:
1. Stores are built once by create_app() and kept on app.state; handlers get
   them through the providers below, never through module globals
2. get_current_user: resolves the session cookie to a User, or 401
3. Path ids are parsed here so every route reports bad ids the same way

Security model:
- The session id lives server-side in SessionStore; the cookie carries it
  signed (HS256) so forged or tampered ids are rejected before lookup
- Cookie is HttpOnly; an Authorization: Bearer header is accepted as fallback
- Only "is a session present" is checked; there are no roles or ownership rules
"""

from datetime import timezone
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, Response, status
from jose import JWTError, jwt

from studyshare.config import Settings
from studyshare.db import MemStorage, User
from studyshare.services import FileRepository, Session, SessionStore


# =============================================================================
# APPLICATION STATE PROVIDERS
# =============================================================================


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> MemStorage:
    return request.app.state.storage


def get_files(request: Request) -> FileRepository:
    return request.app.state.files


def get_sessions(request: Request) -> SessionStore:
    return request.app.state.sessions


AppSettings = Annotated[Settings, Depends(get_app_settings)]
Storage = Annotated[MemStorage, Depends(get_storage)]
Files = Annotated[FileRepository, Depends(get_files)]
Sessions = Annotated[SessionStore, Depends(get_sessions)]


# =============================================================================
# SESSION TOKEN UTILITIES
# =============================================================================


def create_session_token(session: Session, settings: Settings) -> str:
    """
    Sign a session id for transport in the cookie.

    Token payload contains:
    - sid: the opaque server-side session id
    - exp: the session's expiry, so stale cookies fail signature checks too
    """
    payload = {
        "sid": session.id,
        "exp": session.expires_at.astimezone(timezone.utc),
    }
    return jwt.encode(payload, settings.session_secret, algorithm=settings.session_algorithm)


def decode_session_token(token: str, settings: Settings) -> str | None:
    """
    Verify a signed session token.

    Returns the session id if valid, None if invalid/expired.
    """
    try:
        payload = jwt.decode(
            token,
            settings.session_secret,
            algorithms=[settings.session_algorithm],
        )
    except JWTError:
        return None
    session_id = payload.get("sid")
    return session_id if isinstance(session_id, str) else None


def set_session_cookie(response: Response, session: Session, settings: Settings) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_session_token(session, settings),
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        max_age=settings.session_max_age_seconds,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )


# =============================================================================
# AUTHENTICATION DEPENDENCIES
# =============================================================================


def get_token_from_request(
    request: Request,
    settings: AppSettings,
    authorization: Annotated[str | None, Header()] = None,
) -> str | None:
    """
    Extract the signed session token from the request, if any.

    Supports two methods (in order of preference):
    1. HttpOnly session cookie (what the web client uses)
    2. Authorization header: 'Bearer <token>'
    """
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token

    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]

    return None


def get_current_session(
    token: Annotated[str | None, Depends(get_token_from_request)],
    settings: AppSettings,
    sessions: Sessions,
) -> Session | None:
    """The live session attached to the request, or None."""
    if token is None:
        return None
    session_id = decode_session_token(token, settings)
    if session_id is None:
        return None
    return sessions.get(session_id)


def get_current_user(
    session: Annotated[Session | None, Depends(get_current_session)],
    storage: Storage,
) -> User:
    """
    Return the authenticated user for this request.

    Raises 401 if:
    - No session token is present, or its signature/expiry is invalid
    - The session is unknown or expired server-side
    - The session's user no longer exists
    """
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
    )
    if session is None:
        raise unauthorized

    user = storage.get_user(session.user_id)
    if user is None:
        raise unauthorized

    return user


# Type aliases for dependency injection
CurrentSession = Annotated[Session | None, Depends(get_current_session)]
CurrentUser = Annotated[User, Depends(get_current_user)]


# =============================================================================
# PATH PARAMETER HELPERS
# =============================================================================


def parse_id(raw: str, entity: str) -> int:
    """
    Parse a numeric path id.

    Raises 400 "Invalid <entity> ID" for anything but a plain decimal integer.
    """
    if not raw.isdigit() or not raw.isascii():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {entity} ID",
        )
    return int(raw)
