"""Shared schema pieces: camelCase JSON base model and message/error bodies."""

import re
from typing import Annotated, Any

from fastapi import Path
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from blog.models.base import MAX_DB_ID

# Same shape check as the login/register forms: something@something.tld, no spaces.
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Path ids outside the column range are rejected as 400 before reaching storage.
PathId = Annotated[int, Path(ge=1, le=MAX_DB_ID)]


class CamelModel(BaseModel):
    """Base for API bodies: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str = Field(..., description="Human-readable outcome")


class FieldError(BaseModel):
    """One itemized validation failure."""

    field: str = Field(..., description="Offending field (camelCase), or 'body'")
    message: str


class ValidationErrorResponse(BaseModel):
    """400 body for malformed or missing input."""

    errors: list[FieldError]


def require_text(value: str, label: str) -> str:
    """Strip and reject empty strings; used by body validators."""
    value = value.strip()
    if not value:
        raise ValueError(f"{label} is required")
    return value


def require_email(value: str) -> str:
    value = value.strip()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Valid email is required")
    return value


def reject_bool(value: Any, message: str) -> Any:
    """Run before int coercion: JSON true/false are not ids."""
    if isinstance(value, bool):
        raise ValueError(message)
    return value
