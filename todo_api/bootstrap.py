"""Idempotent seeding of the default account run once at process start."""

from __future__ import annotations

import logging

from .entities import NewUser
from .repositories import UserRepository
from .security import PasswordHasher

logger = logging.getLogger(__name__)


def seed_default_user(
    users: UserRepository,
    hasher: PasswordHasher,
    email: str,
    password: str,
) -> bool:
    """
    Create the default user unless an account with *email* already exists.

    Returns:
        ``True`` if a user was created, ``False`` if one was already present.
    """
    if users.find_by_email(email) is not None:
        logger.info("Default user already exists")
        return False

    users.create(NewUser(email=email, password_hash=hasher.hash(password)))
    logger.info("Default user created: %s", email)
    return True
