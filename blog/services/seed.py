"""Idempotent seeding of the fixed role lookup."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog.models import DEFAULT_ROLES, Role

logger = logging.getLogger(__name__)


def seed_roles(session: Session, names: tuple[str, ...] = DEFAULT_ROLES) -> int:
    """
    Insert any role in names that does not exist yet; return how many were created.

    Safe to run on every startup. If another process inserts the same role
    concurrently, the unique constraint on roles.name rejects our insert; that
    transaction is rolled back and the roles are considered seeded.
    """
    existing = {name for (name,) in session.query(Role.name).all()}
    missing = [name for name in names if name not in existing]
    if not missing:
        return 0
    session.add_all([Role(name=name) for name in missing])
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        logger.info("Roles were seeded concurrently; nothing to do.")
        return 0
    logger.info("Seeded roles: %s", ", ".join(missing))
    return len(missing)
