"""Services backing the entity store: files on disk, sessions, credentials."""

from studyshare.services.files import FileRepository
from studyshare.services.passwords import hash_password, verify_password
from studyshare.services.sessions import Session, SessionStore

__all__ = ["FileRepository", "Session", "SessionStore", "hash_password", "verify_password"]
