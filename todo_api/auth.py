"""
Authentication use case and the request guard for protected endpoints.

``AuthenticateUserUseCase`` exchanges an email/password pair for a bearer
token.  ``AuthGuard`` checks the token on every protected request and
re-confirms that the account it names still exists; ``require_auth``
applies the guard to a Flask view and exposes the identity on ``flask.g``.

Both paths fail with a fixed message ("Invalid credentials" at login,
"Unauthorized" at the guard) so that a caller cannot tell which check
rejected it.

Key Concepts Demonstrated:
- Constant-message authentication failures (no user enumeration)
- Decorator pattern for endpoint authentication (``require_auth``)
- Using ``flask.g`` to store request-scoped user identity
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import wraps

from flask import Response, current_app, g, request

from .errors import Unauthenticated
from .repositories import UserRepository
from .security import InvalidToken, PasswordHasher, TokenIdentity, TokenService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
UNAUTHORIZED = "Unauthorized"


class AuthenticateUserUseCase:
    """Verify credentials and issue a bearer token."""

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self._users = users
        self._hasher = hasher
        self._tokens = tokens

    def execute(self, email: str, password: str) -> str:
        """
        Authenticate *email* / *password* and return a signed token.

        Raises:
            Unauthenticated: If no user has this email or the password
                does not match; both cases carry the same message.
        """
        user = self._users.find_by_email(email)
        if user is None:
            logger.warning("Authentication failed")
            raise Unauthenticated(INVALID_CREDENTIALS)

        if not self._hasher.verify(password, user.password_hash):
            logger.warning("Authentication failed")
            raise Unauthenticated(INVALID_CREDENTIALS)

        token = self._tokens.issue(user_id=user.id, email=user.email)
        logger.info("User %s authenticated", user.id)
        return token


def extract_bearer_token(auth_header: str | None) -> str | None:
    """
    Return the token from an ``Authorization: Bearer <token>`` header value.

    Returns ``None`` if the header is absent, uses another scheme, or is
    empty after stripping whitespace.
    """
    if not auth_header:
        return None
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


class AuthGuard:
    """
    Stateless per-request gate.

    A request is admitted only when it carries a bearer token whose
    signature, expiry and claims verify, and whose email still belongs
    to a stored user.
    """

    def __init__(self, tokens: TokenService, users: UserRepository) -> None:
        self._tokens = tokens
        self._users = users

    def authorize(self, auth_header: str | None) -> TokenIdentity:
        """
        Return the identity carried by *auth_header*.

        Raises:
            Unauthenticated: With the message ``"Unauthorized"`` for a
                missing token, a token that fails verification, or a
                token naming an unknown user.
        """
        token = extract_bearer_token(auth_header)
        if token is None:
            logger.debug("Rejected request: no bearer token")
            raise Unauthenticated(UNAUTHORIZED)

        try:
            identity = self._tokens.verify(token)
        except InvalidToken as exc:
            logger.debug("Rejected request: %s", exc)
            raise Unauthenticated(UNAUTHORIZED) from exc

        if self._users.find_by_email(identity.email) is None:
            logger.info("Rejected request: token names an unknown user")
            raise Unauthenticated(UNAUTHORIZED)
        return identity


def require_auth(view_func: Callable[..., tuple[Response, int] | Response]):
    """
    Decorator that enforces bearer-token authentication on a view.

    Runs the application's :class:`AuthGuard` before the view.  On success
    the identity is stored on ``flask.g`` (``g.user_id``, ``g.email``);
    on failure :class:`~todo_api.errors.Unauthenticated` propagates to the
    JSON error handler and the view is never invoked.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        guard: AuthGuard = current_app.extensions["todo_api"].guard
        identity = guard.authorize(request.headers.get("Authorization"))
        g.user_id = identity.user_id
        g.email = identity.email
        return view_func(*args, **kwargs)

    return wrapper
