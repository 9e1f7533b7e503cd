"""
Domain entities for the to-do API.

These plain dataclasses are what use cases and presenters work with.  They
do not depend on SQLAlchemy: repositories translate ORM rows into
entities on the way out and persist entity state on the way in, so
nothing is saved implicitly when an entity is mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass
class User:
    """A registered account, looked up by its unique email."""

    id: int
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


@dataclass(frozen=True)
class NewUser:
    """Fields required to create a user; the store assigns id and timestamps."""

    email: str
    password_hash: str


@dataclass
class Task:
    """
    A to-do item.

    ``completed`` only changes through :meth:`toggle`; title and
    description are fixed at creation.
    """

    id: int
    title: str
    description: str
    completed: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    def toggle(self, now: datetime) -> None:
        """Flip the completion flag and record the modification time."""
        self.completed = not self.completed
        # updated_at must strictly increase even if the clock has not moved
        self.updated_at = max(now, self.updated_at + timedelta(microseconds=1))


@dataclass(frozen=True)
class NewTask:
    """Fields required to create a task; new tasks always start incomplete."""

    title: str
    description: str
    completed: bool = False
