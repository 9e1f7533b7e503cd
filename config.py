"""
Configuration for the to-do API service.

Provides environment-aware configuration classes that follow Flask's
recommended pattern: a shared ``Config`` base class holds defaults, and
environment-specific subclasses (``DevelopmentConfig``, ``TestingConfig``,
``ProductionConfig``) override only what differs.  The ``get_config``
factory resolves the correct class at runtime based on an environment
variable or an explicit argument.

Key Concepts Demonstrated:
- Inheritance-based configuration hierarchy
- Environment variable overrides with sensible defaults
- Separate database and signing secret for testing
- Token settings (shared secret, lifetime, clock skew)
"""

from __future__ import annotations

import os
import re
from datetime import timedelta
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent

INSECURE_JWT_SECRET = "todo-api-dev-jwt-secret-change-in-production"

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean environment variable (``1/true/yes/on`` are truthy)."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def parse_duration(value: str | int) -> timedelta:
    """
    Convert a token lifetime such as ``"1h"``, ``"30m"`` or ``"3600"`` to a timedelta.

    Args:
        value: Bare seconds (int or digit string) or a number followed by
            one of the suffixes ``s``, ``m``, ``h`` or ``d``.

    Returns:
        The equivalent :class:`~datetime.timedelta`.

    Raises:
        ValueError: If the value is not a positive duration in a supported
            format.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        seconds = value
    else:
        match = _DURATION_PATTERN.match(str(value))
        if not match:
            raise ValueError(f"Invalid duration: {value!r}")
        seconds = int(match.group(1)) * _DURATION_UNITS[match.group(2)]
    if seconds <= 0:
        raise ValueError(f"Duration must be positive: {value!r}")
    return timedelta(seconds=seconds)


class Config:
    """
    Base configuration shared by all environments.

    Subclasses should override only the values that need to change.
    Every setting can also be controlled via an environment variable so
    that container orchestrators can inject secrets at deploy time.
    """

    SECRET_KEY: str = os.environ.get(
        "SECRET_KEY", "todo-api-dev-secret-change-in-production"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
    SQLALCHEMY_DATABASE_URI: str = os.environ.get(
        "DATABASE_URL",
        f"sqlite:///{BASE_DIR / 'instance' / 'todo.db'}",
    )

    JWT_SECRET: str = os.environ.get("JWT_SECRET", INSECURE_JWT_SECRET)
    JWT_ALGORITHM: str = "HS256"
    # Lifetime of an issued token, e.g. "1h", "30m" or plain seconds
    JWT_EXPIRES_IN: str = os.environ.get("JWT_EXPIRES_IN", "1h")
    # Seconds of tolerance for clock differences between issuer and verifier
    JWT_CLOCK_SKEW_SECONDS: int = int(os.environ.get("JWT_CLOCK_SKEW_SECONDS", "30"))

    FRONTEND_URL: str = os.environ.get("FRONTEND_URL", "http://localhost:5173")
    PORT: int = int(os.environ.get("PORT", "3000"))
    API_PREFIX: str = os.environ.get("API_PREFIX", "")

    SEED_DEFAULT_USER: bool = _env_flag("SEED_DEFAULT_USER", True)
    DEFAULT_USER_EMAIL: str = os.environ.get("DEFAULT_USER_EMAIL", "user@test.com")
    DEFAULT_USER_PASSWORD: str = os.environ.get("DEFAULT_USER_PASSWORD", "pass")


class DevelopmentConfig(Config):
    """Local development: debug on, testing off."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """
    Configuration for the automated test suite.

    Uses a **separate** SQLite database (``test_todo.db``) and its own
    signing secret so that test runs never touch development data or
    accept development tokens.  The default user is not seeded; tests
    create the users they need.
    """

    DEBUG: bool = True
    TESTING: bool = True
    SQLALCHEMY_DATABASE_URI: str = os.environ.get(
        "TEST_DATABASE_URL",
        f"sqlite:///{BASE_DIR / 'instance' / 'test_todo.db'}?check_same_thread=False",
    )
    SQLALCHEMY_ENGINE_OPTIONS: dict = {"pool_pre_ping": True}
    JWT_SECRET: str = os.environ.get(
        "TEST_JWT_SECRET", "test-jwt-secret-key-for-local-tests-123456"
    )
    SEED_DEFAULT_USER: bool = False


class ProductionConfig(Config):
    """
    Configuration for production deployments.

    All secrets **must** be supplied through environment variables; the
    application factory refuses to start with the development JWT secret.
    """

    DEBUG: bool = False
    TESTING: bool = False


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Resolve a configuration class by environment name.

    Args:
        env: One of ``"development"``, ``"testing"``, or
            ``"production"``.  When ``None``, the ``FLASK_ENV``
            environment variable is consulted, falling back to
            ``"development"`` if unset.

    Returns:
        The configuration class (not an instance).  Falls back to
        ``DevelopmentConfig`` for unrecognised names.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
