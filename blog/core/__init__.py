"""Core app configuration and database."""

from blog.core.config import get_settings, settings
from blog.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
