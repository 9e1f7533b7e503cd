"""
REST API endpoints for the to-do service.

Handlers only parse and validate HTTP input, call one use case and map
the result through a presenter.  Errors raised anywhere below propagate
to the JSON error handlers registered by the application factory.

Endpoints:
    GET    /health              - Service health check (public)
    POST   /authenticate        - Exchange credentials for a bearer token
    POST   /tasks               - Create a task
    GET    /tasks               - List tasks (optional ``completed`` filter)
    GET    /tasks/<id>          - Retrieve a single task
    PATCH  /tasks/<id>/status   - Toggle a task's completion flag
    DELETE /tasks/<id>          - Delete a task

Key Concepts Demonstrated:
- Blueprint-based route organisation
- Thin controllers delegating to use cases
- Input validation before any store access
"""

from __future__ import annotations

import os
from typing import Any

from flask import Blueprint, Response, current_app, jsonify, request

from ..auth import require_auth
from ..presenters import present_authentication, present_task, present_tasks
from ..services import Services
from ..validation import (
    validate_credentials,
    validate_list_query,
    validate_task_body,
    validate_task_id,
)

api_bp = Blueprint("todo_api", __name__)


# =====================================================================
# Helper Functions
# =====================================================================


def _services() -> Services:
    return current_app.extensions["todo_api"]


def _json_body() -> Any:
    """Return the parsed JSON body, or ``None`` when absent or not JSON."""
    return request.get_json(silent=True)


# =====================================================================
# API Endpoints
# =====================================================================


@api_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Liveness probe for load balancers and orchestrators; no auth required."""
    return (
        jsonify(
            {
                "status": "healthy",
                "service": "todo-api",
                "environment": os.getenv("ENVIRONMENT", "unknown"),
            }
        ),
        200,
    )


@api_bp.route("/authenticate", methods=["POST"])
def authenticate() -> tuple[Response, int]:
    """
    Authenticate a user and issue a bearer token.

    Expects a JSON body with ``email`` and ``password``.

    Returns:
        200 with ``message``, ``token`` and ``tokenType`` on success.
        400 if the body fails validation.
        401 ``"Invalid credentials"`` if the email is unknown or the
        password is wrong.
    """
    email, password = validate_credentials(_json_body())
    token = _services().authenticate_user.execute(email, password)
    return jsonify(present_authentication(token)), 200


@api_bp.route("/tasks", methods=["POST"])
@require_auth
def create_task() -> tuple[Response, int]:
    """Create a task from ``title`` and ``description``; returns 201."""
    title, description = validate_task_body(_json_body())
    task = _services().create_task.execute(title, description)
    return jsonify(present_task(task)), 201


@api_bp.route("/tasks", methods=["GET"])
@require_auth
def get_tasks() -> tuple[Response, int]:
    """
    List tasks.

    ``?completed=true`` or ``?completed=false`` restricts the result to
    tasks with that completion flag; without it every task is returned.
    """
    completed = validate_list_query(request.args)
    tasks = _services().get_all_tasks.execute(completed=completed)
    return jsonify(present_tasks(tasks)), 200


@api_bp.route("/tasks/<task_id>", methods=["GET"])
@require_auth
def get_task(task_id: str) -> tuple[Response, int]:
    task = _services().get_task_by_id.execute(validate_task_id(task_id))
    return jsonify(present_task(task)), 200


@api_bp.route("/tasks/<task_id>/status", methods=["PATCH"])
@require_auth
def update_task_status(task_id: str) -> tuple[Response, int]:
    """
    Toggle the completion flag of a task.

    Takes no body: each call flips ``completed``.

    Returns:
        200 with the updated task, 400 for an invalid id, 404 if the
        task does not exist.
    """
    task = _services().update_task_status.execute(validate_task_id(task_id))
    return jsonify(present_task(task)), 200


@api_bp.route("/tasks/<task_id>", methods=["DELETE"])
@require_auth
def delete_task(task_id: str) -> tuple[str, int]:
    """Delete a task permanently; 204 with an empty body."""
    _services().delete_task.execute(validate_task_id(task_id))
    return "", 204
