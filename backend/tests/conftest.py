"""Pytest configuration and fixtures."""

import os
import tempfile

# Keep the module-level app in studyshare.main from creating ./uploads
os.environ.setdefault("UPLOADS_DIR", tempfile.mkdtemp(prefix="studyshare-uploads-"))

import pytest
from collections.abc import AsyncGenerator
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from studyshare.config import Settings
from studyshare.db import MemStorage
from studyshare.main import create_app
from tests.utils import register


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing uploads at a per-test directory."""
    return Settings(
        uploads_dir=tmp_path / "uploads",
        session_secret="test-secret",
        environment="development",
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Fresh application, and therefore fresh stores, for every test."""
    return create_app(settings)


@pytest.fixture
def storage(app: FastAPI) -> MemStorage:
    return app.state.storage


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def auth_client(client: AsyncClient) -> AsyncClient:
    """Client holding a session for a freshly registered user."""
    response = await register(client)
    assert response.status_code == 201
    return client
