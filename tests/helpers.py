"""Test helper functions used across the test suites."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

TEST_JWT_SECRET = "test-jwt-secret-key-for-local-tests-123456"

JWT_FORMAT = re.compile(r"^[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+$")


def auth_headers(token: str) -> dict[str, str]:
    """Build common JSON API headers with bearer token auth."""
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


def required_claims(
    *, user_id: int = 1, email: str = "test@example.com", expires_in: timedelta = timedelta(hours=1)
) -> dict[str, Any]:
    """Build a valid claim set; a negative *expires_in* yields an expired token."""
    now = datetime.now(timezone.utc)
    return {
        "sub": str(user_id),
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
    }


def make_token(
    payload: dict[str, Any], secret: str = TEST_JWT_SECRET, algorithm: str = "HS256"
) -> str:
    """Encode a JWT payload with the given secret and algorithm."""
    return jwt.encode(payload, secret, algorithm=algorithm)


def tamper(token: str) -> str:
    """Return *token* with its signature segment altered."""
    header, payload, signature = token.split(".")
    replacement = "A" if signature[0] != "A" else "B"
    return f"{header}.{payload}.{replacement}{signature[1:]}"
