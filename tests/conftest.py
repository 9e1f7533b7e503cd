"""
Shared pytest fixtures for the to-do API test suite.

Provides the Flask application, test client, database session, user and
task factories, and bearer-token headers used by the unit, integration
and contract suites.

Key SDET Concepts Demonstrated:
- Session-scoped vs function-scoped fixtures for performance and isolation
- Factory pattern (user_factory, task_factory) for flexible test-data creation
- Fixture teardown / cleanup to prevent test pollution
- Tokens minted through the application's own token service
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any

import pytest
from faker import Faker

# Set testing environment before importing the app
os.environ["FLASK_ENV"] = "testing"
os.environ["TEST_JWT_SECRET"] = "test-jwt-secret-key-for-local-tests-123456"

from todo_api import create_app, db
from todo_api.entities import NewUser, User
from todo_api.models import TaskRecord

from tests.helpers import auth_headers

fake = Faker()

DEFAULT_EMAIL = "test@example.com"
DEFAULT_PASSWORD = "password123"


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="session")
def app():
    """
    Provide the Flask application instance for the entire test session.

    Creates the app once using the 'testing' configuration (default-user
    seeding disabled) and shares it across all tests.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """Provide a Flask test client scoped to a single test function."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Provide a clean database for each test function.

    Creates all tables before the test, yields the db instance for use,
    then rolls back any uncommitted changes and drops all tables.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


@pytest.fixture
def services(app):
    """The use-case wiring the factory attached to the app."""
    return app.extensions["todo_api"]


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def user_factory(db_session, services) -> Callable[..., User]:
    """
    Factory that stores users with a properly hashed password.

    Accepts optional email and password arguments; tables are dropped by
    ``db_session`` after the test.
    """

    def _create_user(email: str = DEFAULT_EMAIL, password: str = DEFAULT_PASSWORD) -> User:
        return services.users.create(
            NewUser(email=email, password_hash=services.hasher.hash(password))
        )

    return _create_user


@pytest.fixture
def task_factory(db_session) -> Callable[..., TaskRecord]:
    """
    Factory fixture that inserts task rows directly into the database.

    Returns a callable ``_create_task(**kwargs)`` with Faker defaults, so
    tests can arrange state (including completed tasks) without going
    through the API.
    """

    def _create_task(
        *,
        title: str | None = None,
        description: str | None = None,
        completed: bool = False,
    ) -> TaskRecord:
        task = TaskRecord(
            title=title or fake.sentence(nb_words=3)[:50],
            description=description or fake.sentence(nb_words=8)[:100],
            completed=completed,
        )
        db_session.session.add(task)
        db_session.session.commit()
        # Detach with loaded attributes so later requests cannot expire them
        db_session.session.refresh(task)
        db_session.session.expunge(task)
        return task

    return _create_task


@pytest.fixture
def default_user(user_factory) -> User:
    return user_factory()


@pytest.fixture
def auth_token(default_user, services) -> str:
    """A valid bearer token for ``default_user``."""
    return services.tokens.issue(user_id=default_user.id, email=default_user.email)


@pytest.fixture
def api_headers(auth_token) -> dict[str, str]:
    """Authorization + JSON headers for ``default_user``."""
    return auth_headers(auth_token)


@pytest.fixture
def sample_task(task_factory) -> TaskRecord:
    return task_factory(title="Sample Task", description="This is a sample task")


@pytest.fixture
def mixed_tasks(task_factory) -> list[TaskRecord]:
    """Two incomplete and two completed tasks, in insertion order."""
    return [
        task_factory(title="Open one", completed=False),
        task_factory(title="Done one", completed=True),
        task_factory(title="Open two", completed=False),
        task_factory(title="Done two", completed=True),
    ]


@pytest.fixture
def valid_task_data() -> dict[str, Any]:
    return {"title": "Buy milk", "description": "2% milk"}
