"""Tests for the file repository, session store and password hashing."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from studyshare.services import FileRepository, SessionStore, hash_password, verify_password
from studyshare.services.sessions import Session, prune_sessions_periodically


# =============================================================================
# FILE REPOSITORY
# =============================================================================


def test_root_directory_is_created(tmp_path):
    root = tmp_path / "nested" / "uploads"
    FileRepository(root)
    assert root.is_dir()


async def test_save_file_writes_and_records_path(tmp_path):
    repo = FileRepository(tmp_path)
    path = await repo.save_file(b"hello", "notes.pdf", 7)
    assert path.name == "7_notes.pdf"
    assert path.read_bytes() == b"hello"
    assert repo.get_file_path(7) == path
    assert repo.get_file_path(8) is None


async def test_save_file_strips_directories(tmp_path):
    repo = FileRepository(tmp_path)
    path = await repo.save_file(b"x", "../../etc/passwd", 1)
    assert path.parent == tmp_path.resolve()
    assert path.name == "1_passwd"
    windows = await repo.save_file(b"x", "C:\\Users\\bob\\slides.pptx", 2)
    assert windows.name == "2_slides.pptx"


async def test_save_file_failure_is_not_recorded(tmp_path):
    repo = FileRepository(tmp_path)
    # A directory in the way makes open() fail
    (tmp_path / "3_blocked.pdf").mkdir()
    with pytest.raises(OSError):
        await repo.save_file(b"data", "blocked.pdf", 3)
    assert repo.get_file_path(3) is None


# =============================================================================
# SESSIONS
# =============================================================================


def test_session_create_and_get():
    store = SessionStore(max_age=timedelta(days=7))
    session = store.create(user_id=4)
    assert store.get(session.id) == session
    assert session.expires_at - session.created_at == timedelta(days=7)
    assert store.get("unknown") is None


def test_session_ids_are_unique():
    store = SessionStore(max_age=timedelta(days=1))
    ids = {store.create(1).id for _ in range(50)}
    assert len(ids) == 50


def test_destroy_session():
    store = SessionStore(max_age=timedelta(days=1))
    session = store.create(1)
    store.destroy(session.id)
    store.destroy(session.id)
    assert store.get(session.id) is None
    assert len(store) == 0


def test_expired_session_is_invisible():
    store = SessionStore(max_age=timedelta(seconds=-1))
    session = store.create(1)
    assert store.get(session.id) is None
    assert len(store) == 0


def test_prune_expired_only_removes_expired():
    store = SessionStore(max_age=timedelta(days=1))
    live = store.create(1)
    store.max_age = timedelta(seconds=-1)
    store.create(2)
    store.create(3)
    assert len(store) == 3
    assert store.prune_expired() == 2
    assert len(store) == 1
    assert store.get(live.id) == live


def test_session_is_expired():
    now = datetime.now(timezone.utc)
    session = Session(id="s", user_id=1, created_at=now, expires_at=now + timedelta(minutes=1))
    assert not session.is_expired(now)
    assert session.is_expired(now + timedelta(minutes=1))


async def test_periodic_prune_runs_until_cancelled():
    store = SessionStore(max_age=timedelta(seconds=-1))
    store.create(1)
    task = asyncio.create_task(prune_sessions_periodically(store, 0.01))
    await asyncio.sleep(0.05)
    assert len(store) == 0
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task


# =============================================================================
# PASSWORDS
# =============================================================================


def test_hash_and_verify_round_trip():
    stored = hash_password("correct horse")
    assert verify_password("correct horse", stored)
    assert not verify_password("wrong horse", stored)


def test_hash_is_salted():
    first = hash_password("same")
    second = hash_password("same")
    assert first != second
    assert verify_password("same", first)
    assert verify_password("same", second)


def test_hash_format():
    hashed, _, salt = hash_password("pw").partition(".")
    assert len(bytes.fromhex(hashed)) == 64
    assert len(bytes.fromhex(salt)) == 16


@pytest.mark.parametrize("stored", ["", "nodot", "zz.salt", "abcd."])
def test_malformed_credentials_never_verify(stored):
    assert not verify_password("pw", stored)
