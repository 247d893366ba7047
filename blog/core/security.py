"""Password hashing, password policy and JWT creation/verification for authentication."""

import re
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from blog.core.config import settings
from blog.models.base import MAX_DB_ID

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

# Purpose claim values; a token is only accepted where its purpose matches.
TOKEN_PURPOSE_ACCESS = "access"
TOKEN_PURPOSE_RESET = "reset"

_UPPERCASE = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"\d")


def password_policy_errors(password: str) -> list[str]:
    """Return every rule the password breaks (empty list means it is acceptable)."""
    errors: list[str] = []
    if len(password) < PASSWORD_MIN_LEN:
        errors.append(f"Password must be at least {PASSWORD_MIN_LEN} characters long")
    if len(password) > PASSWORD_MAX_LEN:
        errors.append(f"Password must be at most {PASSWORD_MAX_LEN} characters long")
    if not _UPPERCASE.search(password):
        errors.append("Password must contain at least one uppercase letter")
    if not _DIGIT.search(password):
        errors.append("Password must contain at least one digit")
    return errors


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """
    Hash a plain-text password for storage. Do not store plain passwords.

    The salt is random per call, so hashing the same password twice yields
    different digests. An out-of-range work factor raises ValueError.
    """
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=rounds if rounds is not None else settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Malformed hashes verify as False."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


def create_access_token(
    sub: str | int,
    role: str | int | None = None,
    purpose: str = TOKEN_PURPOSE_ACCESS,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT with sub (user id), optional role, purpose, iat and exp."""
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "purpose": purpose,
        "exp": now + expires_delta,
        "iat": now,
    }
    if role is not None:
        payload["role"] = role
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def create_reset_token(sub: str | int) -> str:
    """Create a password-reset token for sub; same TTL as access tokens."""
    return create_access_token(sub, purpose=TOKEN_PURPOSE_RESET)


def decode_access_token(token: str, purpose: str = TOKEN_PURPOSE_ACCESS) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, role, purpose, exp, iat).
    Raises jwt.PyJWTError on a malformed, tampered, expired or wrong-purpose token.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    payload = jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["exp", "iat", "sub"]},
    )
    if payload.get("purpose") != purpose:
        raise jwt.InvalidTokenError(f"Token purpose is not '{purpose}'")
    return payload


def token_subject_id(payload: dict[str, Any]) -> int:
    """Return the user id in the sub claim. Raises jwt.InvalidTokenError unless it is an id in column range."""
    sub = payload.get("sub")
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise jwt.InvalidTokenError("Invalid token subject") from None
    if not 1 <= user_id <= MAX_DB_ID:
        raise jwt.InvalidTokenError("Invalid token subject")
    return user_id
