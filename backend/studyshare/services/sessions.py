"""
Server-side session records for cookie authentication.

Sessions live in memory only and expire a fixed time after creation.
Expired entries are invisible to get() right away and are physically
removed by prune_expired(), which the application runs periodically.
"""

import asyncio
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    """An authenticated session."""

    id: str
    user_id: int
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(timezone.utc)) >= self.expires_at


class SessionStore:
    """Map of opaque session id -> Session."""

    def __init__(self, max_age: timedelta):
        self.max_age = max_age
        self._sessions: dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, user_id: int) -> Session:
        now = datetime.now(timezone.utc)
        session = Session(
            id=secrets.token_urlsafe(32),
            user_id=user_id,
            created_at=now,
            expires_at=now + self.max_age,
        )
        self._sessions[session.id] = session
        return session

    def get(self, session_id: str) -> Session | None:
        """Return the live session for `session_id`, or None if unknown or expired."""
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if session.is_expired():
            del self._sessions[session_id]
            return None
        return session

    def destroy(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def prune_expired(self) -> int:
        """Remove every expired session. Returns how many were removed."""
        now = datetime.now(timezone.utc)
        expired = [sid for sid, s in self._sessions.items() if s.is_expired(now)]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("Pruned %d expired sessions", len(expired))
        return len(expired)


async def prune_sessions_periodically(store: SessionStore, period_seconds: float) -> None:
    """Run prune_expired() every `period_seconds` until cancelled."""
    while True:
        await asyncio.sleep(period_seconds)
        store.prune_expired()
