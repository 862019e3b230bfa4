"""
Pytest configuration and fixtures.

Every test gets its own SQLite file under ``tmp_path`` with the
migrations applied, so tests never share state.
"""
import asyncio

import pytest
from fastapi.testclient import TestClient

from prompt_library_api.app.core.config import settings
from prompt_library_api.app.core.db import init_db
from prompt_library_api.app.main import app
from prompt_library_api.app.schemas.prompt import PromptCreate
from prompt_library_api.app.services.prompt_service import PromptService


@pytest.fixture(autouse=True)
def db_path(tmp_path, monkeypatch):
    """Point the application at a fresh database for each test."""
    path = tmp_path / "prompts.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    init_db()
    return path


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_prompt():
    """Factory creating prompts through the service layer."""

    def _make(title="Vote Test Prompt", description="A test prompt", content="Test prompt content", tags=None):
        data = PromptCreate(title=title, description=description, content=content, tags=tags or [])
        return asyncio.run(PromptService.create_prompt(data))

    return _make
