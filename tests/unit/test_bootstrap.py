"""
Unit tests for default-user seeding.

Seeding runs on every start, so it must create the account exactly once
and leave an existing account untouched.
"""

import logging

import pytest

from tests.fakes import InMemoryUserRepository
from todo_api.bootstrap import seed_default_user
from todo_api.entities import NewUser
from todo_api.security import PasswordHasher

pytestmark = pytest.mark.unit


@pytest.fixture
def hasher():
    return PasswordHasher()


def test_creates_user_with_hashed_password(hasher):
    """Test that the seeded user can log in with the configured password."""
    # Arrange
    users = InMemoryUserRepository()

    # Act
    created = seed_default_user(users, hasher, "user@example.com", "pass")

    # Assert
    stored = users.find_by_email("user@example.com")
    assert created is True
    assert stored.password_hash != "pass"
    assert hasher.verify("pass", stored.password_hash)


def test_is_idempotent(hasher):
    """Test that a second run leaves exactly one user in place."""
    # Arrange
    users = InMemoryUserRepository()
    seed_default_user(users, hasher, "user@example.com", "pass")

    # Act
    created_again = seed_default_user(users, hasher, "user@example.com", "pass")

    # Assert
    assert created_again is False
    assert users.find_by_id(2) is None


def test_existing_password_is_not_overwritten(hasher):
    # Arrange
    users = InMemoryUserRepository()
    users.create(NewUser(email="user@example.com", password_hash=hasher.hash("changed")))

    # Act
    seed_default_user(users, hasher, "user@example.com", "pass")

    # Assert
    assert hasher.verify("changed", users.find_by_email("user@example.com").password_hash)


def test_logs_outcome(hasher, caplog):
    users = InMemoryUserRepository()

    with caplog.at_level(logging.INFO, logger="todo_api.bootstrap"):
        seed_default_user(users, hasher, "user@example.com", "pass")
        seed_default_user(users, hasher, "user@example.com", "pass")

    assert "Default user created: user@example.com" in caplog.messages
    assert "Default user already exists" in caplog.messages
