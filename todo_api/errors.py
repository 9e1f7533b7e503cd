"""
Error taxonomy and JSON error handlers for the to-do API.

Use cases and the request guard raise the exceptions defined here; the
handlers registered by :func:`register_error_handlers` turn them (and any
werkzeug ``HTTPException`` or unexpected failure) into a single JSON
envelope::

    {"statusCode": 404, "message": "Task with ID 7 not found", "error": "Not Found"}
"""

from __future__ import annotations

import logging
from http import HTTPStatus

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map to a specific HTTP status."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str | list[str]) -> None:
        super().__init__(message if isinstance(message, str) else "; ".join(message))
        self.message = message


class ValidationError(ApiError):
    """Malformed, missing or out-of-range input; carries every failed rule."""

    status_code = HTTPStatus.BAD_REQUEST

    def __init__(self, messages: list[str] | str) -> None:
        if isinstance(messages, str):
            messages = [messages]
        super().__init__(list(messages))


class Unauthenticated(ApiError):
    """Missing, invalid or expired token, or rejected login credentials."""

    status_code = HTTPStatus.UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class NotFound(ApiError):
    """A referenced entity does not exist."""

    status_code = HTTPStatus.NOT_FOUND


def error_body(status_code: int, message: str | list[str]) -> dict:
    """Build the JSON error envelope for *status_code*."""
    return {
        "statusCode": int(status_code),
        "message": message,
        "error": HTTPStatus(status_code).phrase,
    }


def _json_error(status_code: int, message: str | list[str]) -> tuple[Response, int]:
    return jsonify(error_body(status_code, message)), int(status_code)


def register_error_handlers(app: Flask) -> None:
    """Attach JSON error handlers for API errors, HTTP errors and crashes."""

    @app.errorhandler(ApiError)
    def handle_api_error(error: ApiError) -> tuple[Response, int]:
        return _json_error(error.status_code, error.message)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException) -> tuple[Response, int]:
        status_code = error.code or HTTPStatus.INTERNAL_SERVER_ERROR
        return _json_error(status_code, error.description or HTTPStatus(status_code).phrase)

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception) -> tuple[Response, int]:
        logger.exception("Internal server error: %s", error)
        return _json_error(HTTPStatus.INTERNAL_SERVER_ERROR, "Internal server error")
