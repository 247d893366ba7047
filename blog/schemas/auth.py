"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field, field_validator

from blog.core.security import USERNAME_MAX_LEN, password_policy_errors
from blog.models.base import MAX_DB_ID
from blog.schemas.common import CamelModel, reject_bool, require_email, require_text


def _check_password_policy(v: str) -> str:
    errors = password_policy_errors(v)
    if errors:
        raise ValueError("; ".join(errors))
    return v


class RegisterRequest(CamelModel):
    """New account: username, email, password and the id of an existing role."""

    username: str = Field(..., max_length=USERNAME_MAX_LEN, description="Unique display name")
    email: str = Field(..., max_length=255, description="Unique email address")
    password: str = Field(..., description="8+ chars, one uppercase letter, one digit")
    role_id: int = Field(..., ge=1, le=MAX_DB_ID, description="Id of an existing role")

    @field_validator("username")
    @classmethod
    def username_present(cls, v: str) -> str:
        return require_text(v, "Username")

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str) -> str:
        return require_email(v)

    @field_validator("password")
    @classmethod
    def password_policy(cls, v: str) -> str:
        return _check_password_policy(v)

    @field_validator("role_id", mode="before")
    @classmethod
    def role_id_not_bool(cls, v):
        return reject_bool(v, "Valid role ID is required")


class LoginRequest(CamelModel):
    """Credentials for login."""

    email: str = Field(..., max_length=255, description="Account email")
    password: str = Field(..., description="Password")

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str) -> str:
        return require_email(v)

    @field_validator("password")
    @classmethod
    def password_present(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class ForgotPasswordRequest(CamelModel):
    """Email of the account whose password should be reset."""

    email: str = Field(..., max_length=255)

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str) -> str:
        return require_email(v)


class ResetPasswordRequest(CamelModel):
    """Reset token from the emailed link plus the new password."""

    token: str = Field(..., description="Password reset token")
    new_password: str = Field(..., description="8+ chars, one uppercase letter, one digit")

    @field_validator("token")
    @classmethod
    def token_present(cls, v: str) -> str:
        return require_text(v, "Token")

    @field_validator("new_password")
    @classmethod
    def password_policy(cls, v: str) -> str:
        return _check_password_policy(v)


class PublicUser(BaseModel):
    """User projection safe to return to clients (no password hash)."""

    id: int
    username: str
    email: str
    role: int = Field(..., description="Role id")


class LoginResponse(BaseModel):
    """Token and public user returned after successful login."""

    message: str = "User logged in successfully"
    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")
    user: PublicUser


class CurrentUser(BaseModel):
    """Authenticated user (id, username, email, role_id) for dependency injection."""

    id: int
    username: str
    email: str
    role_id: int

    class Config:
        from_attributes = True

    def to_public(self) -> PublicUser:
        return PublicUser(id=self.id, username=self.username, email=self.email, role=self.role_id)
