"""Response shapes returned by the API, decoupled from the storage schema."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import timezone
from typing import Any

from .entities import Task

TOKEN_TYPE = "Bearer"


def present_task(task: Task) -> dict[str, Any]:
    """
    Serialise a task for API responses.

    ``updated_at`` and ``deleted_at`` are internal and not exposed.
    ``createdAt`` is an ISO-8601 UTC string.
    """
    created_at = task.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "completed": task.completed,
        "createdAt": created_at.astimezone(timezone.utc).isoformat(),
    }


def present_tasks(tasks: Iterable[Task]) -> list[dict[str, Any]]:
    return [present_task(task) for task in tasks]


def present_authentication(token: str) -> dict[str, str]:
    return {
        "message": "User authenticated successfully",
        "token": token,
        "tokenType": TOKEN_TYPE,
    }
