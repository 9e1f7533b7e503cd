"""
Per-application wiring of stores, security helpers and use cases.

The application factory builds one :class:`Services` bundle and stores it
in ``app.extensions["todo_api"]``; route handlers resolve their use cases
from there instead of constructing collaborators themselves.
"""

from __future__ import annotations

from dataclasses import dataclass

from flask_sqlalchemy import SQLAlchemy

from .auth import AuthenticateUserUseCase, AuthGuard
from .repositories import (
    SqlAlchemyTaskRepository,
    SqlAlchemyUserRepository,
    TaskRepository,
    UserRepository,
)
from .security import PasswordHasher, TokenService
from .use_cases import (
    CreateTaskUseCase,
    DeleteTaskUseCase,
    GetAllTasksUseCase,
    GetTaskByIdUseCase,
    UpdateTaskStatusUseCase,
)


@dataclass
class Services:
    users: UserRepository
    tasks: TaskRepository
    hasher: PasswordHasher
    tokens: TokenService
    guard: AuthGuard
    authenticate_user: AuthenticateUserUseCase
    create_task: CreateTaskUseCase
    get_task_by_id: GetTaskByIdUseCase
    get_all_tasks: GetAllTasksUseCase
    update_task_status: UpdateTaskStatusUseCase
    delete_task: DeleteTaskUseCase


def build_services(
    users: UserRepository,
    tasks: TaskRepository,
    tokens: TokenService,
    hasher: PasswordHasher | None = None,
) -> Services:
    """Assemble the use cases around the given stores and token service."""
    hasher = hasher or PasswordHasher()
    return Services(
        users=users,
        tasks=tasks,
        hasher=hasher,
        tokens=tokens,
        guard=AuthGuard(tokens, users),
        authenticate_user=AuthenticateUserUseCase(users, hasher, tokens),
        create_task=CreateTaskUseCase(tasks),
        get_task_by_id=GetTaskByIdUseCase(tasks),
        get_all_tasks=GetAllTasksUseCase(tasks),
        update_task_status=UpdateTaskStatusUseCase(tasks),
        delete_task=DeleteTaskUseCase(tasks),
    )


def build_sqlalchemy_services(database: SQLAlchemy, tokens: TokenService) -> Services:
    """Production wiring: both stores backed by *database*."""
    return build_services(
        users=SqlAlchemyUserRepository(database),
        tasks=SqlAlchemyTaskRepository(database),
        tokens=tokens,
    )
