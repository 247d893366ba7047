"""Seed the default roles (admin, user).

Revision ID: 20250301000100
Revises: 20250301000000
Create Date: 2025-03-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20250301000100"
down_revision: Union[str, None] = "20250301000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

roles = sa.table("roles", sa.column("name", sa.String))


def upgrade() -> None:
    # No-op for roles that already exist.
    for name in ("admin", "user"):
        op.execute(
            sa.text("INSERT INTO roles (name) VALUES (:name) ON CONFLICT (name) DO NOTHING").bindparams(
                name=name
            )
        )


def downgrade() -> None:
    op.execute(roles.delete().where(roles.c.name.in_(("admin", "user"))))
