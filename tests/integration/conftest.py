"""Pytest configuration and fixtures for integration tests against a real SQLite file."""

import pytest

from src.core import db_client
from src.core.config import settings
from src.core.repository import Repositories, build_repositories


@pytest.fixture
async def sqlite_db(tmp_path, monkeypatch):
    """Point the store at a fresh database file and create the schema."""
    db_path = tmp_path / "condocheck.db"
    monkeypatch.setattr(settings, "sqlite_db_path", str(db_path))
    await db_client.init_db()
    yield db_path
    await db_client.close_connection()


@pytest.fixture
def sqlite_repos(sqlite_db) -> Repositories:
    """Repository bundle over the SQLite store."""
    return build_repositories()
