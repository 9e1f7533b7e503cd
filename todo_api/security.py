"""
Password hashing and bearer-token handling.

Tokens are JSON Web Tokens signed with a shared server secret (HS256 by
default).  Only this service issues and verifies them, so there is no
key distribution: the same ``JWT_SECRET`` signs and verifies.

Token structure (claims):
    - ``sub``   -- id of the authenticated user, serialised as a string
      (RFC 7519 defines the subject as a StringOrURI).
    - ``email`` -- the user's email, used to re-check the account exists.
    - ``iat``   -- *issued-at* timestamp (UTC epoch seconds).
    - ``exp``   -- *expiration* timestamp (UTC epoch seconds).

Key Concepts Demonstrated:
- Symmetric signing and verification with PyJWT
- Canonical JWT claims (iat, exp, sub) and a custom claim
- Algorithm pinning to prevent algorithm-confusion attacks
- Werkzeug salted password hashing
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

REQUIRED_TOKEN_CLAIMS = ["sub", "email", "iat", "exp"]

# Positive decimal user id in ASCII digits
_SUBJECT_PATTERN = re.compile(r"^[1-9][0-9]*\Z")


class PasswordHasher:
    """One-way password hashing backed by Werkzeug (scrypt/PBKDF2 with a salt)."""

    def hash(self, password: str) -> str:
        return generate_password_hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        return check_password_hash(password_hash, password)


@dataclass(frozen=True)
class TokenIdentity:
    """Identity carried by a verified token."""

    user_id: int
    email: str


class InvalidToken(Exception):
    """Raised when a token fails signature, expiry or claim validation."""


class TokenService:
    """
    Issue and verify signed bearer tokens.

    Args:
        secret: Shared signing secret.
        expires_in: Lifetime of each issued token.
        algorithm: JWS algorithm used for signing; verification accepts
            only this algorithm.
        leeway_seconds: Tolerance for clock differences when checking
            ``exp`` and ``iat``.
        clock: Returns the current aware UTC time; injectable for tests.
    """

    def __init__(
        self,
        secret: str,
        expires_in: timedelta,
        algorithm: str = "HS256",
        leeway_seconds: int = 30,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not secret:
            raise ValueError("A signing secret is required")
        self._secret = secret
        self._expires_in = expires_in
        self._algorithm = algorithm
        self._leeway = leeway_seconds
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def expires_in(self) -> timedelta:
        return self._expires_in

    def issue(self, user_id: int, email: str) -> str:
        """
        Create a signed token for the given identity.

        Args:
            user_id: Primary key of the authenticated user.  Must be a
                positive integer.
            email: The user's email.  Must be a non-empty string.

        Returns:
            A compact JWS string (``header.payload.signature``).

        Raises:
            ValueError: If *user_id* is not positive or *email* is blank.
        """
        if int(user_id) <= 0:
            raise ValueError("user_id must be a positive integer")
        if not isinstance(email, str) or not email.strip():
            raise ValueError("email must be a non-empty string")

        now = self._clock()
        payload: dict[str, Any] = {
            "sub": str(int(user_id)),
            "email": email,
            # NumericDate: seconds since the epoch (RFC 7519)
            "iat": int(now.timestamp()),
            "exp": int((now + self._expires_in).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenIdentity:
        """
        Decode and validate *token*.

        Verifies the signature against the pinned algorithm, checks
        expiration with the configured leeway, requires every claim in
        :data:`REQUIRED_TOKEN_CLAIMS`, and checks that ``sub`` names a
        positive integer id and ``email`` is non-blank.

        Raises:
            InvalidToken: If any check fails.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_TOKEN_CLAIMS},
                leeway=self._leeway,
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidToken(str(exc)) from exc

        subject = payload.get("sub")
        email = payload.get("email")
        if not isinstance(subject, str) or not _SUBJECT_PATTERN.match(subject):
            raise InvalidToken("Invalid sub claim")
        if not isinstance(email, str) or not email.strip():
            raise InvalidToken("Invalid email claim")
        return TokenIdentity(user_id=int(subject), email=email)
