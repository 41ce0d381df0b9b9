"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

import pytest

from domain.entities.user import User


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.users = AsyncMock()
        self.profiles = AsyncMock()
        self.posts = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def other_user_id() -> UUID:
    """A random user ID (distinct from user_id)."""
    return uuid4()


@pytest.fixture
def user(user_id: UUID) -> User:
    """A stored user matching user_id."""
    return User(
        id=user_id,
        name="Ada Lovelace",
        email="ada@example.com",
        password_hash="hashed",
        avatar="//www.gravatar.com/avatar/abc?s=200&r=pg&d=mm",
    )


@pytest.fixture
def auth_provider_mock() -> MagicMock:
    provider = MagicMock()
    provider.create_token.return_value = "signed-token"
    return provider


@pytest.fixture
def hasher_mock() -> MagicMock:
    hasher = MagicMock()
    hasher.hash.return_value = "hashed"
    hasher.verify.return_value = True
    return hasher
