"""
To-do API Flask application factory.

Provides the ``create_app`` factory function that assembles the service:
configuration, the SQLAlchemy extension, CORS, the use-case wiring, the
JSON error handlers and the API blueprint.  The factory pattern allows
different configurations (development, testing, production) to be
injected at runtime, which is essential for isolated test suites.

Key Concepts Demonstrated:
- Application factory pattern (create_app)
- Flask extension initialisation (SQLAlchemy, CORS)
- Explicit, idempotent seeding of the default user at start-up
- Lazy import to avoid circular dependencies
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from flask import Flask
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy

from config import INSECURE_JWT_SECRET, get_config, parse_duration

# Shared SQLAlchemy instance -- initialised with a concrete app inside create_app()
db = SQLAlchemy()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _ensure_sqlite_db_parent_exists(database_uri: str) -> None:
    """Create parent directories for file-based SQLite URIs when missing."""
    sqlite_prefix = "sqlite:///"
    if not database_uri.startswith(sqlite_prefix):
        return

    sqlite_path = database_uri[len(sqlite_prefix) :].split("?", 1)[0]
    if sqlite_path in ("", ":memory:"):
        return

    Path(sqlite_path).parent.mkdir(parents=True, exist_ok=True)


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the to-do API application.

    Args:
        config_name: The configuration environment to load (e.g.
            ``"development"``, ``"testing"``, ``"production"``).  When
            ``None``, the value is resolved from the ``FLASK_ENV``
            environment variable, defaulting to ``"development"``.

    Returns:
        A fully configured :class:`~flask.Flask` application with tables
        created and, when ``SEED_DEFAULT_USER`` is set, the default user
        present.

    Raises:
        RuntimeError: If the production configuration still uses the
            development JWT secret.
        ValueError: If ``JWT_EXPIRES_IN`` is not a valid duration.
    """
    app = Flask(__name__, instance_relative_config=True)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    if not app.config["DEBUG"] and not app.config["TESTING"]:
        if app.config["JWT_SECRET"] == INSECURE_JWT_SECRET:
            raise RuntimeError("JWT_SECRET must be set in production.")

    logger.info("Creating to-do API app with config: %s", config_class.__name__)

    os.makedirs(app.instance_path, exist_ok=True)
    _ensure_sqlite_db_parent_exists(app.config.get("SQLALCHEMY_DATABASE_URI", ""))

    db.init_app(app)

    CORS(
        app,
        origins=[app.config["FRONTEND_URL"]],
        methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
        allow_headers=["Content-Type", "Authorization"],
        supports_credentials=True,
    )

    # Imported here because these modules import ``db`` from this package
    from .bootstrap import seed_default_user
    from .errors import register_error_handlers
    from .routes.api import api_bp
    from .security import TokenService
    from .services import build_sqlalchemy_services

    tokens = TokenService(
        secret=app.config["JWT_SECRET"],
        expires_in=parse_duration(app.config["JWT_EXPIRES_IN"]),
        algorithm=app.config["JWT_ALGORITHM"],
        leeway_seconds=int(app.config["JWT_CLOCK_SKEW_SECONDS"]),
    )
    services = build_sqlalchemy_services(db, tokens)
    app.extensions["todo_api"] = services

    register_error_handlers(app)
    app.register_blueprint(api_bp, url_prefix=app.config["API_PREFIX"] or None)

    @app.cli.command("seed-user")
    def seed_user_command() -> None:
        """Create the configured default user if it does not exist."""
        seed_default_user(
            services.users,
            services.hasher,
            app.config["DEFAULT_USER_EMAIL"],
            app.config["DEFAULT_USER_PASSWORD"],
        )

    # In production this would typically be handled by a migration tool
    with app.app_context():
        db.create_all()
        logger.info("Database tables created")
        if app.config["SEED_DEFAULT_USER"]:
            seed_default_user(
                services.users,
                services.hasher,
                app.config["DEFAULT_USER_EMAIL"],
                app.config["DEFAULT_USER_PASSWORD"],
            )

    return app
