"""Request/response schemas for posts."""

from datetime import datetime

from pydantic import Field, field_validator

from blog.schemas.comment import CommentWithAuthor
from blog.schemas.common import CamelModel, require_text


class PostCreate(CamelModel):
    """Body for creating or replacing a post."""

    title: str = Field(..., max_length=255)
    content: str

    @field_validator("title")
    @classmethod
    def title_present(cls, v: str) -> str:
        return require_text(v, "Title")

    @field_validator("content")
    @classmethod
    def content_present(cls, v: str) -> str:
        return require_text(v, "Content")


class PostUpdate(PostCreate):
    """PUT replaces both title and content."""


class PostAuthor(CamelModel):
    id: int
    username: str
    email: str


class PostOut(CamelModel):
    """A post as stored."""

    id: int
    title: str
    content: str
    user_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PostDetail(PostOut):
    """A post with its author and its comments (each with author)."""

    user: PostAuthor | None = None
    comments: list[CommentWithAuthor] = Field(default_factory=list)
