"""ORM model for the fixed role lookup (admin, user)."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from blog.models.base import Base, TimestampMixin

# Seeded once at startup; see blog.services.seed.
DEFAULT_ROLES = ("admin", "user")


class Role(Base, TimestampMixin):
    """Named permission class referenced by users. Names are unique."""

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(32), nullable=False, unique=True)

    users = relationship("User", back_populates="role")
