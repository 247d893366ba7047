"""Tests for blog.services.seed: idempotent default role seeding."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from blog.models import Base, Role
from blog.services.seed import seed_roles


class TestSeedRolesAgainstDatabase(unittest.TestCase):
    """seed_roles against an in-memory SQLite database."""

    def setUp(self) -> None:
        self.engine = create_engine("sqlite://")
        Base.metadata.create_all(self.engine)
        self.session = sessionmaker(bind=self.engine)()

    def tearDown(self) -> None:
        self.session.close()
        self.engine.dispose()

    def test_seeds_admin_and_user_once(self) -> None:
        self.assertEqual(seed_roles(self.session), 2)
        self.assertEqual(seed_roles(self.session), 0)
        names = [r.name for r in self.session.query(Role).order_by(Role.id)]
        self.assertEqual(names, ["admin", "user"])

    def test_only_missing_roles_are_added(self) -> None:
        self.session.add(Role(name="user"))
        self.session.commit()
        self.assertEqual(seed_roles(self.session), 1)
        self.assertEqual(self.session.query(Role).count(), 2)


class TestSeedRolesConcurrentInsert(unittest.TestCase):
    """A unique-constraint violation from a concurrent seeder is rolled back, not raised."""

    def test_integrity_error_is_treated_as_seeded(self) -> None:
        session = MagicMock()
        session.query.return_value.all.return_value = []
        session.commit.side_effect = IntegrityError("INSERT INTO roles", {}, Exception("duplicate"))
        self.assertEqual(seed_roles(session), 0)
        session.rollback.assert_called_once()


if __name__ == "__main__":
    unittest.main()
