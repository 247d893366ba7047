"""Account endpoints (register, login, password reset) and the get_current_user dependency."""

import logging
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog.core.config import get_settings
from blog.core.database import get_db
from blog.core.errors import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
    InternalError,
    InvalidTokenError,
    NotFoundError,
)
from blog.core.security import (
    TOKEN_PURPOSE_RESET,
    create_access_token,
    create_reset_token,
    decode_access_token,
    hash_password,
    token_subject_id,
    verify_password,
)
from blog.models import Role, User
from blog.schemas.auth import (
    CurrentUser,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    PublicUser,
    RegisterRequest,
    ResetPasswordRequest,
)
from blog.schemas.common import MessageResponse
from blog.services.email import EmailDeliveryError, send_password_reset_email

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)

NO_TOKEN_MESSAGE = "Access denied. No token provided."
INVALID_TOKEN_MESSAGE = "Invalid token."
USER_NOT_FOUND_MESSAGE = "User not found."


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """
    Dependency: resolve the Bearer JWT to a stored user.

    401 when no token is sent, 400 when it does not verify (bad signature,
    expired, wrong purpose, unusable sub), 404 when its user no longer exists.
    """
    if credentials is None or not credentials.credentials:
        logger.warning("Auth: no token provided")
        raise AuthenticationError(NO_TOKEN_MESSAGE)
    try:
        payload = decode_access_token(credentials.credentials)
        user_id = token_subject_id(payload)
    except jwt.PyJWTError as e:
        logger.warning("Auth: invalid token (%s)", type(e).__name__)
        raise InvalidTokenError(INVALID_TOKEN_MESSAGE) from e
    user = db.get(User, user_id)
    if user is None:
        logger.warning("Auth: user not found for token subject id %s", user_id)
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    return CurrentUser.model_validate(user)


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """
    Create an account. Email and username must be unused and roleId must name
    an existing role. No token is issued; log in afterwards.
    """
    if db.query(User).filter(User.email == body.email).first() is not None:
        logger.warning("Register: user already exists with email %s", body.email)
        raise ConflictError("User already exists")
    if db.query(User).filter(User.username == body.username).first() is not None:
        logger.warning("Register: username %s is taken", body.username)
        raise ConflictError("Username already taken")
    if db.get(Role, body.role_id) is None:
        raise BadRequestError("Invalid role")

    user = User(
        username=body.username,
        email=body.email,
        password_hash=hash_password(body.password),
        role_id=body.role_id,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email/username.
        db.rollback()
        raise ConflictError("User already exists") from e
    logger.info("Register: user id=%s registered", user.id)
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT and the public user.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = db.query(User).filter(User.email == body.email).first()
    if user is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    if not verify_password(body.password, user.password_hash):
        logger.warning("Login: invalid credentials for user id=%s", user.id)
        raise AuthenticationError("Invalid credentials")
    token = create_access_token(sub=user.id, role=user.role_id)
    logger.info("Login: user id=%s logged in", user.id)
    return LoginResponse(
        token=token,
        user=PublicUser(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role_id,
        ),
    )


@router.get("/me", response_model=PublicUser)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PublicUser:
    """Return the authenticated user."""
    return current_user.to_public()


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    body: ForgotPasswordRequest,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Email a reset link carrying a reset-purpose token (default TTL) to the account."""
    user = db.query(User).filter(User.email == body.email).first()
    if user is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    token = create_reset_token(user.id)
    try:
        send_password_reset_email(user.email, token, get_settings())
    except EmailDeliveryError as e:
        logger.error("Forgot password: delivery failed for user id=%s: %s", user.id, e.message)
        raise InternalError("Error sending password reset email") from e
    logger.info("Forgot password: reset email sent for user id=%s", user.id)
    return MessageResponse(message="Password reset email sent")


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(
    body: ResetPasswordRequest,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Verify the reset token, then store a hash of the new password for its user."""
    try:
        payload = decode_access_token(body.token, purpose=TOKEN_PURPOSE_RESET)
        user_id = token_subject_id(payload)
    except jwt.PyJWTError as e:
        logger.warning("Reset password: invalid token (%s)", type(e).__name__)
        raise InvalidTokenError(INVALID_TOKEN_MESSAGE) from e
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    user.password_hash = hash_password(body.new_password)
    db.commit()
    logger.info("Reset password: password updated for user id=%s", user.id)
    return MessageResponse(message="Password has been reset successfully")
