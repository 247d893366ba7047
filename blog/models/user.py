"""ORM model for blog users (authors of posts and comments)."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from blog.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """
    User account for JWT authentication.

    password_hash always holds a bcrypt digest, never the plain password.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False)

    role = relationship("Role", back_populates="users")
    posts = relationship("Post", back_populates="user")
    comments = relationship("Comment", back_populates="user")
