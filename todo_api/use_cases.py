"""
Task use cases.

Each class is one application-level operation over the task store.  The
only translation they perform is turning an empty lookup into
:class:`~todo_api.errors.NotFound`; every other failure from the store
propagates unchanged.

Mutations load the entity, change it in memory and then persist it with
an explicit ``update`` call.  There is no locking: two concurrent toggles
of the same task race and the last write wins, and a toggle racing a
delete ends in ``NotFound``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from .entities import NewTask, Task
from .errors import NotFound
from .repositories import TaskRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _load_task(tasks: TaskRepository, task_id: int) -> Task:
    task = tasks.find_by_id(task_id)
    if task is None:
        raise NotFound(f"Task with ID {task_id} not found")
    return task


class CreateTaskUseCase:
    def __init__(self, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, title: str, description: str) -> Task:
        """Persist a new, incomplete task and return it with its id and timestamps."""
        task = self._tasks.create(NewTask(title=title, description=description))
        logger.info("Task %s created", task.id)
        return task


class GetTaskByIdUseCase:
    def __init__(self, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, task_id: int) -> Task:
        return _load_task(self._tasks, task_id)


class GetAllTasksUseCase:
    def __init__(self, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, completed: bool | None = None) -> list[Task]:
        """Return every task, or only those whose ``completed`` equals the filter."""
        return self._tasks.find_all(completed=completed)


class UpdateTaskStatusUseCase:
    """Toggle a task between complete and incomplete."""

    def __init__(
        self,
        tasks: TaskRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._tasks = tasks
        self._clock = clock

    def execute(self, task_id: int) -> Task:
        task = _load_task(self._tasks, task_id)
        task.toggle(self._clock())
        try:
            updated = self._tasks.update(task)
        except LookupError as exc:
            # Deleted between the load and the write
            raise NotFound(f"Task with ID {task_id} not found") from exc
        logger.info("Task %s marked completed=%s", updated.id, updated.completed)
        return updated


class DeleteTaskUseCase:
    def __init__(self, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, task_id: int) -> None:
        """
        Permanently remove a task.

        A second delete of the same id fails with ``NotFound``.
        """
        _load_task(self._tasks, task_id)
        self._tasks.delete(task_id)
        logger.info("Task %s deleted", task_id)
