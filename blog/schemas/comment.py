"""Request/response schemas for comments."""

from datetime import datetime

from pydantic import Field, field_validator

from blog.models.base import MAX_DB_ID
from blog.schemas.common import CamelModel, reject_bool, require_text


class CommentCreate(CamelModel):
    """Body for commenting on a post."""

    content: str
    post_id: int = Field(..., ge=1, le=MAX_DB_ID, description="Post being commented on")

    @field_validator("content")
    @classmethod
    def content_present(cls, v: str) -> str:
        return require_text(v, "Content")

    @field_validator("post_id", mode="before")
    @classmethod
    def post_id_not_bool(cls, v):
        return reject_bool(v, "Valid post ID is required")


class CommentUpdate(CamelModel):
    """Only the content of a comment can change."""

    content: str

    @field_validator("content")
    @classmethod
    def content_present(cls, v: str) -> str:
        return require_text(v, "Content")


class CommentAuthor(CamelModel):
    id: int
    username: str


class CommentOut(CamelModel):
    """A comment as stored."""

    id: int
    content: str
    user_id: int
    post_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CommentWithAuthor(CommentOut):
    user: CommentAuthor | None = None
