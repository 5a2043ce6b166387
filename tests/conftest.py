"""
Shared pytest fixtures for users API tests.
"""
import os
from dataclasses import replace
from typing import Dict, List
from unittest.mock import AsyncMock, patch

import pytest
from bson import ObjectId
from bson.errors import InvalidId

from users_api.core.config import Settings
from users_api.core.exceptions import InvalidIdentifierError, UserNotFoundError
from users_api.domain.models.user import User
from users_api.domain.repositories.user_repository import UserRepository


TEST_ENV = {
    "VAULT_ADDR": "http://vault.test:8200",
    "VAULT_TOKEN": "test-token",
    "DB_HOST": "mongo.test",
    "DB_PORT": "27017",
    "DB_NAME": "test_users_db",
    "PASSWORD_HASH_ROUNDS": "4",
    "RATE_LIMIT_PER_SECOND": "0",
    "DB_CONNECT_INITIAL_INTERVAL": "5",
    "DB_CONNECT_MAX_INTERVAL": "60",
    "DB_CONNECT_MAX_ATTEMPTS": "5",
    "APP_MODE": "release",
}


class InMemoryUserRepository(UserRepository):
    """Dict-backed UserRepository used as a test double for MongoDB"""

    def __init__(self) -> None:
        self.documents: Dict[str, User] = {}
        self.calls: List[str] = []

    def _check_id(self, user_id: str) -> None:
        try:
            ObjectId(user_id)
        except (InvalidId, TypeError):
            raise InvalidIdentifierError(user_id)

    async def find_all(self) -> List[User]:
        self.calls.append("find_all")
        return [replace(user) for user in self.documents.values()]

    async def find_by_id(self, user_id: str) -> User:
        self.calls.append("find_by_id")
        self._check_id(user_id)
        if user_id not in self.documents:
            raise UserNotFoundError(user_id)
        return replace(self.documents[user_id])

    async def create(self, user: User) -> User:
        self.calls.append("create")
        stored = replace(user, id=str(ObjectId()))
        self.documents[stored.id] = stored
        return replace(stored)

    async def update(self, user_id: str, user: User) -> User:
        self.calls.append("update")
        self._check_id(user_id)
        if user_id not in self.documents:
            raise UserNotFoundError(user_id)
        merged = replace(self.documents[user_id], **user.present_fields())
        self.documents[user_id] = merged
        return replace(merged)

    async def delete(self, user_id: str) -> None:
        self.calls.append("delete")
        self._check_id(user_id)
        if self.documents.pop(user_id, None) is None:
            raise UserNotFoundError(user_id)


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    with patch.dict(os.environ, TEST_ENV, clear=False):
        yield TEST_ENV


@pytest.fixture
def test_settings(mock_env) -> Settings:
    """Settings built from the test environment (rate limiting off, cheap bcrypt)."""
    return Settings()


@pytest.fixture
def mock_user_repo():
    """Mock UserRepository with async methods."""
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def memory_user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()
