"""
Database models for the to-do API.

Defines the SQLAlchemy ORM tables that back the credential and task
stores.  Route handlers and use cases never touch these classes directly;
the repositories in :mod:`todo_api.repositories` map them to and from the
domain entities.

Both tables declare a nullable ``deleted_at`` column.  Deletion is a hard
delete and no query filters on the column, so it is currently unused.

Key Concepts Demonstrated:
- SQLAlchemy declarative models with explicit table constraints
- Timezone-aware datetime handling for SQLite compatibility
"""

from __future__ import annotations

from datetime import datetime, timezone

from . import db


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """
    Normalise a datetime read back from the database to aware UTC.

    SQLite does not store timezone information, so datetimes read back
    from the database may be *naive* (``tzinfo is None``) even though
    they were originally created with ``timezone.utc``.  Naive values are
    assumed to be UTC; aware values are converted.

    Args:
        value: The datetime to normalise, or ``None``.

    Returns:
        A timezone-aware UTC datetime, or ``None``.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UserRecord(db.Model):
    """
    Stored user account.

    Attributes:
        id: Auto-incrementing integer primary key.
        email: Unique email address (max 255 chars), indexed because every
            login and every authenticated request looks a user up by email.
        password_hash: Werkzeug-generated hash of the user's password.
        created_at: Timestamp of account creation, stored as UTC.
        updated_at: Timestamp of the last modification, stored as UTC.
        deleted_at: Declared soft-delete marker; never set.
    """

    __tablename__ = "users"

    __table_args__ = (
        db.CheckConstraint("length(email) <= 255", name="ck_users_email_len"),
    )

    id: int = db.Column(db.Integer, primary_key=True)
    email: str = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash: str = db.Column(db.String(256), nullable=False)
    created_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=utcnow
    )
    deleted_at: datetime | None = db.Column(db.DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<UserRecord {self.id}: {self.email}>"


class TaskRecord(db.Model):
    """
    Stored task.

    Attributes:
        id: Auto-incrementing primary key, immutable once assigned.
        title: Short summary (the API accepts at most 50 characters).
        description: Longer text (the API accepts at most 100 characters).
        completed: Completion flag, ``False`` for new tasks.
        created_at: Timestamp of task creation (UTC).
        updated_at: Timestamp of the last status change (UTC).
        deleted_at: Declared soft-delete marker; never set.
    """

    __tablename__ = "tasks"

    id: int = db.Column(db.Integer, primary_key=True)
    title: str = db.Column(db.String(255), nullable=False)
    description: str = db.Column(db.Text, nullable=False)
    completed: bool = db.Column(db.Boolean, nullable=False, default=False)
    created_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=utcnow
    )
    deleted_at: datetime | None = db.Column(db.DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<TaskRecord {self.id}: {self.title}>"
