"""Application errors. Each carries the HTTP status and the client-facing message."""

from fastapi import status


class AppError(Exception):
    """Base error rendered as {"message": ...} with status_code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class NotFoundError(AppError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class AuthenticationError(AppError):
    """No usable credentials on the request."""

    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidTokenError(AuthenticationError):
    """Bearer or reset token is malformed, tampered, expired or of the wrong purpose."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthorizationError(AppError):
    """Authenticated, but not allowed to act on the resource."""

    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(AppError):
    """A unique field is already taken."""

    status_code = status.HTTP_400_BAD_REQUEST


class BadRequestError(AppError):
    """Well-formed input that refers to something unusable (e.g. an unknown role id)."""

    status_code = status.HTTP_400_BAD_REQUEST


class InternalError(AppError):
    """Unexpected storage, hashing, signing or delivery failure. Message is generic."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
