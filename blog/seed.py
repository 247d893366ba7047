"""
CLI entrypoint for seeding the default roles. Run after migrations, e.g.:

  alembic upgrade head && python -m blog.seed

The API also seeds on startup unless SEED_ROLES_ON_STARTUP=false.
"""

import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from blog.core.database import SessionLocal
from blog.services.seed import seed_roles

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Insert any missing default roles."""
    db = SessionLocal()
    try:
        created = seed_roles(db)
        logger.info("Role seeding completed: roles_created=%s", created)
        return 0
    except SQLAlchemyError as e:
        logger.exception("Role seeding failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
