"""Pydantic request/response schemas."""

from blog.schemas.auth import (
    CurrentUser,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    PublicUser,
    RegisterRequest,
    ResetPasswordRequest,
)
from blog.schemas.comment import CommentCreate, CommentOut, CommentUpdate, CommentWithAuthor
from blog.schemas.common import MessageResponse, ValidationErrorResponse
from blog.schemas.health import HealthResponse
from blog.schemas.post import PostCreate, PostDetail, PostOut, PostUpdate

__all__ = [
    "CommentCreate",
    "CommentOut",
    "CommentUpdate",
    "CommentWithAuthor",
    "CurrentUser",
    "ForgotPasswordRequest",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "PostCreate",
    "PostDetail",
    "PostOut",
    "PostUpdate",
    "PublicUser",
    "RegisterRequest",
    "ResetPasswordRequest",
    "ValidationErrorResponse",
]
