"""
Credential and task stores.

The protocols describe the only data-access surface the use cases rely
on; the SQLAlchemy classes are the production implementations.  No
business rule lives here: "not found" is reported as ``None`` and any
database error propagates unchanged to the caller.
"""

from __future__ import annotations

from typing import Protocol

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select

from .entities import NewTask, NewUser, Task, User
from .models import TaskRecord, UserRecord, ensure_utc, utcnow


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...

    def find_by_id(self, user_id: int) -> User | None: ...

    def create(self, user: NewUser) -> User: ...

    def save(self, user: User) -> User: ...


class TaskRepository(Protocol):
    def find_all(self, completed: bool | None = None) -> list[Task]: ...

    def find_by_id(self, task_id: int) -> Task | None: ...

    def create(self, task: NewTask) -> Task: ...

    def update(self, task: Task) -> Task: ...

    def delete(self, task_id: int) -> None: ...


# Primary keys are signed 64-bit integers; larger ids cannot be stored
MAX_STORED_ID = 2**63 - 1


def _get_record(database: SQLAlchemy, model: type, record_id: int):
    """Load a row by primary key, or ``None`` if absent or out of the key range."""
    if not 1 <= record_id <= MAX_STORED_ID:
        return None
    return database.session.get(model, record_id)


def _user_from_record(record: UserRecord) -> User:
    return User(
        id=record.id,
        email=record.email,
        password_hash=record.password_hash,
        created_at=ensure_utc(record.created_at),
        updated_at=ensure_utc(record.updated_at),
        deleted_at=ensure_utc(record.deleted_at),
    )


def _task_from_record(record: TaskRecord) -> Task:
    return Task(
        id=record.id,
        title=record.title,
        description=record.description,
        completed=bool(record.completed),
        created_at=ensure_utc(record.created_at),
        updated_at=ensure_utc(record.updated_at),
        deleted_at=ensure_utc(record.deleted_at),
    )


class SqlAlchemyUserRepository:
    """User store backed by the ``users`` table."""

    def __init__(self, database: SQLAlchemy) -> None:
        self._db = database

    def find_by_email(self, email: str) -> User | None:
        record = self._db.session.scalar(
            select(UserRecord).where(UserRecord.email == email)
        )
        return _user_from_record(record) if record else None

    def find_by_id(self, user_id: int) -> User | None:
        record = _get_record(self._db, UserRecord, user_id)
        return _user_from_record(record) if record else None

    def create(self, user: NewUser) -> User:
        record = UserRecord(email=user.email, password_hash=user.password_hash)
        self._db.session.add(record)
        self._db.session.commit()
        return _user_from_record(record)

    def save(self, user: User) -> User:
        """Insert or update *user*, keyed on its id."""
        record = self._db.session.get(UserRecord, user.id)
        if record is None:
            record = UserRecord(id=user.id, created_at=user.created_at)
            self._db.session.add(record)
        record.email = user.email
        record.password_hash = user.password_hash
        record.updated_at = utcnow()
        self._db.session.commit()
        return _user_from_record(record)


class SqlAlchemyTaskRepository:
    """Task store backed by the ``tasks`` table; lists in insertion (id) order."""

    def __init__(self, database: SQLAlchemy) -> None:
        self._db = database

    def find_all(self, completed: bool | None = None) -> list[Task]:
        stmt = select(TaskRecord).order_by(TaskRecord.id.asc())
        if completed is not None:
            stmt = stmt.where(TaskRecord.completed == completed)
        return [_task_from_record(record) for record in self._db.session.scalars(stmt)]

    def find_by_id(self, task_id: int) -> Task | None:
        record = _get_record(self._db, TaskRecord, task_id)
        return _task_from_record(record) if record else None

    def create(self, task: NewTask) -> Task:
        record = TaskRecord(
            title=task.title,
            description=task.description,
            completed=task.completed,
        )
        self._db.session.add(record)
        self._db.session.commit()
        return _task_from_record(record)

    def update(self, task: Task) -> Task:
        """
        Persist the mutable state of *task*.

        Only ``completed`` and ``updated_at`` are written; the id, title,
        description and creation time of a stored task never change.
        """
        record = _get_record(self._db, TaskRecord, task.id)
        if record is None:
            raise LookupError(f"Task {task.id} is not stored")
        record.completed = task.completed
        record.updated_at = task.updated_at
        self._db.session.commit()
        return _task_from_record(record)

    def delete(self, task_id: int) -> None:
        record = _get_record(self._db, TaskRecord, task_id)
        if record is not None:
            self._db.session.delete(record)
            self._db.session.commit()
