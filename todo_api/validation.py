"""
Boundary validation for request bodies, query strings and path ids.

Every validator collects all failed rules and raises a single
:class:`~todo_api.errors.ValidationError` carrying the full list of
messages, so a client sees every problem with its request at once.
Unknown fields are rejected rather than silently ignored.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from email_validator import EmailNotValidError, validate_email

from .errors import ValidationError

TITLE_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 100

_INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+\Z")
_BOOLEAN_VALUES = {"true": True, "false": False}


def _require_object(body: Any) -> Mapping[str, Any]:
    if not isinstance(body, Mapping):
        raise ValidationError("Request body must be a JSON object")
    return body


def _unknown_fields(data: Mapping[str, Any], allowed: tuple[str, ...]) -> list[str]:
    return [f"property {name} should not exist" for name in data if name not in allowed]


def _is_blank(value: Any) -> bool:
    # Only absent, null or empty values count as missing; "  " is a value
    return value is None or value == ""


def _check_text(
    data: Mapping[str, Any], field: str, label: str, max_length: int
) -> list[str]:
    value = data.get(field)
    if _is_blank(value):
        return [f"{label} is required"]
    if not isinstance(value, str):
        return [f"{label} must be a string"]
    if len(value) > max_length:
        return [f"{label} must not exceed {max_length} characters"]
    return []


def validate_credentials(body: Any) -> tuple[str, str]:
    """
    Validate a login body.

    Returns:
        The ``(email, password)`` pair, unmodified.

    Raises:
        ValidationError: For a missing/empty or malformed email, a
            missing/empty password, or any unexpected field.
    """
    data = _require_object(body)
    errors = _unknown_fields(data, ("email", "password"))

    email = data.get("email")
    if _is_blank(email):
        errors.append("Email is required")
    elif not isinstance(email, str):
        errors.append("Invalid email format")
    else:
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            errors.append("Invalid email format")

    password = data.get("password")
    if _is_blank(password):
        errors.append("Password is required")
    elif not isinstance(password, str):
        errors.append("Password must be a string")

    if errors:
        raise ValidationError(errors)
    return email, password


def validate_task_body(body: Any) -> tuple[str, str]:
    """
    Validate a task creation body.

    Returns:
        The ``(title, description)`` pair.

    Raises:
        ValidationError: For missing, non-string or over-long fields, or
            any field other than ``title`` and ``description``.
    """
    data = _require_object(body)
    errors = _unknown_fields(data, ("title", "description"))
    errors += _check_text(data, "title", "Title", TITLE_MAX_LENGTH)
    errors += _check_text(data, "description", "Description", DESCRIPTION_MAX_LENGTH)
    if errors:
        raise ValidationError(errors)
    return data["title"], data["description"]


def validate_list_query(args: Mapping[str, Any]) -> bool | None:
    """
    Validate the task listing query string.

    Args:
        args: The request arguments.  A werkzeug ``MultiDict`` is read
            with ``getlist`` so repeated parameters are rejected.

    Returns:
        ``True``/``False`` when ``completed`` is given, otherwise ``None``.
    """
    errors = _unknown_fields(args, ("completed",))
    completed = None
    if "completed" in args:
        values = args.getlist("completed") if hasattr(args, "getlist") else [args["completed"]]
        raw = values[0] if len(values) == 1 else None
        if isinstance(raw, bool):
            completed = raw
        elif isinstance(raw, str) and raw in _BOOLEAN_VALUES:
            completed = _BOOLEAN_VALUES[raw]
        else:
            errors.append("Completed must be true or false")
    if errors:
        raise ValidationError(errors)
    return completed


def validate_task_id(raw: str | int) -> int:
    """
    Parse a task id taken from the URL path.

    Raises:
        ValidationError: ``"ID must be a valid number"`` for non-integer
            text, ``"ID must be greater than 0"`` for ids below 1.
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        task_id = raw
    elif isinstance(raw, str) and _INTEGER_PATTERN.match(raw.strip()):
        task_id = int(raw)
    else:
        raise ValidationError("ID must be a valid number")
    if task_id < 1:
        raise ValidationError("ID must be greater than 0")
    return task_id
