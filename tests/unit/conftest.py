"""Pytest configuration and fixtures for unit tests."""

from datetime import UTC, datetime

import pytest

from src.core.repository import Repositories, build_repositories
from src.domain.condo import Condo
from src.domain.user import User, UserRole
from src.services.user_service import hash_password
from tests.unit.mocks import InMemoryDBClient


# 12:00 in Sao Paulo on Wednesday 2025-06-11
NOW = datetime(2025, 6, 11, 15, 0, tzinfo=UTC)
PASSWORD = "secret123"
PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture
def in_memory_db():
    """Provides a fresh InMemoryDBClient for each test."""
    return InMemoryDBClient()


@pytest.fixture
def repos(in_memory_db) -> Repositories:
    """Repository bundle backed by the in-memory database."""
    return build_repositories(in_memory_db)


@pytest.fixture
async def condo(repos) -> Condo:
    return await repos.condos.create({"name": "Residencial Aurora", "address": "Av. Brasil, 1500", "created_at": NOW})


async def _create_user(repos: Repositories, name: str, role: UserRole, condo_id: str | None) -> User:
    return await repos.users.create(
        {
            "name": name,
            "role": role,
            "password_hash": PASSWORD_HASH,
            "active": True,
            "condo_id": condo_id,
        }
    )


@pytest.fixture
async def owner(repos, condo) -> User:
    """Building manager without a home condominium."""
    return await _create_user(repos, "Ricardo Alencar", UserRole.SINDICO, None)


@pytest.fixture
async def manager(repos, condo) -> User:
    return await _create_user(repos, "Mariana Costa", UserRole.GESTOR, condo.id)


@pytest.fixture
async def caretaker(repos, condo) -> User:
    return await _create_user(repos, "João Silva", UserRole.ZELADOR, condo.id)


@pytest.fixture
async def cleaner(repos, condo) -> User:
    return await _create_user(repos, "Marcos Souza", UserRole.LIMPEZA, condo.id)
