"""
Integration tests for the SQLAlchemy-backed stores.

These run against the test database and check that the repositories
return domain entities, keep insertion order, persist only explicit
updates and hard-delete rows.
"""

from datetime import timedelta

import pytest

from todo_api.entities import NewTask, NewUser, Task
from todo_api.models import TaskRecord
from todo_api.repositories import SqlAlchemyTaskRepository, SqlAlchemyUserRepository

pytestmark = pytest.mark.integration


@pytest.fixture
def users(db_session):
    return SqlAlchemyUserRepository(db_session)


@pytest.fixture
def tasks(db_session):
    return SqlAlchemyTaskRepository(db_session)


class TestUserRepository:
    def test_create_and_find_by_email(self, users):
        # Act
        created = users.create(NewUser(email="repo@example.com", password_hash="hash"))
        found = users.find_by_email("repo@example.com")

        # Assert
        assert found == created
        assert found.id > 0
        assert found.created_at.tzinfo is not None

    def test_find_by_id(self, users):
        created = users.create(NewUser(email="byid@example.com", password_hash="hash"))

        assert users.find_by_id(created.id).email == "byid@example.com"
        assert users.find_by_id(created.id + 100) is None

    def test_unknown_email_returns_none(self, users):
        assert users.find_by_email("missing@example.com") is None

    def test_save_updates_existing_user(self, users):
        """Test that save writes changed fields back to the stored row."""
        # Arrange
        user = users.create(NewUser(email="save@example.com", password_hash="old"))
        user.password_hash = "new"

        # Act
        users.save(user)

        # Assert
        assert users.find_by_email("save@example.com").password_hash == "new"


class TestTaskRepository:
    def test_create_assigns_id_and_defaults(self, tasks):
        task = tasks.create(NewTask(title="Repo", description="task"))

        assert isinstance(task, Task)
        assert task.id > 0
        assert task.completed is False
        assert task.updated_at >= task.created_at
        assert task.deleted_at is None

    def test_find_all_orders_by_id_and_filters(self, tasks, task_factory):
        # Arrange
        first = task_factory(title="a", completed=True)
        second = task_factory(title="b", completed=False)
        third = task_factory(title="c", completed=True)

        # Act & Assert
        assert [t.id for t in tasks.find_all()] == [first.id, second.id, third.id]
        assert [t.id for t in tasks.find_all(completed=True)] == [first.id, third.id]
        assert [t.id for t in tasks.find_all(completed=False)] == [second.id]

    def test_entity_changes_are_not_saved_without_update(self, tasks):
        """Test that mutating a returned entity does not touch the stored row."""
        # Arrange
        task = tasks.create(NewTask(title="Detached", description="entity"))

        # Act
        task.toggle(task.updated_at + timedelta(seconds=1))

        # Assert
        assert tasks.find_by_id(task.id).completed is False

    def test_update_persists_completed_and_updated_at(self, tasks):
        # Arrange
        task = tasks.create(NewTask(title="Persist", description="toggle"))
        original_updated_at = task.updated_at
        task.toggle(task.updated_at + timedelta(seconds=1))

        # Act
        tasks.update(task)

        # Assert
        stored = tasks.find_by_id(task.id)
        assert stored.completed is True
        assert stored.updated_at > original_updated_at
        assert stored.title == "Persist"

    def test_update_of_missing_row_raises(self, tasks):
        task = tasks.create(NewTask(title="Gone", description="soon"))
        tasks.delete(task.id)

        with pytest.raises(LookupError):
            tasks.update(task)

    def test_delete_is_a_hard_delete(self, tasks, db_session):
        """Test that delete removes the row instead of setting deleted_at."""
        # Arrange
        task = tasks.create(NewTask(title="Hard", description="delete"))

        # Act
        tasks.delete(task.id)

        # Assert
        assert tasks.find_by_id(task.id) is None
        assert db_session.session.get(TaskRecord, task.id) is None

    @pytest.mark.parametrize("task_id", [2**63, 10**20])
    def test_ids_beyond_key_range_are_not_found(self, tasks, users, task_id):
        """Test that oversized ids read as absent instead of failing in the driver."""
        assert tasks.find_by_id(task_id) is None
        assert users.find_by_id(task_id) is None
        tasks.delete(task_id)

    def test_delete_missing_id_is_a_no_op(self, tasks):
        tasks.delete(404)

        assert tasks.find_all() == []
