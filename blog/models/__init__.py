"""SQLAlchemy ORM models."""

from blog.models.base import MAX_DB_ID, Base
from blog.models.comment import Comment
from blog.models.post import Post
from blog.models.role import DEFAULT_ROLES, Role
from blog.models.user import User

__all__ = ["MAX_DB_ID", "Base", "Comment", "DEFAULT_ROLES", "Post", "Role", "User"]
