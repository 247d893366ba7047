"""Outbound email. Delivery is not wired to a transport; messages are logged only."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blog.core.config import Settings

logger = logging.getLogger(__name__)

PASSWORD_RESET_SUBJECT = "Password Reset Request"


class EmailDeliveryError(Exception):
    """Raised when a message cannot be handed to the transport."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def send_email(to: str, subject: str, body: str, sender: str | None = None) -> bool:
    """Log the message as sent. Raises EmailDeliveryError on an empty recipient."""
    if not to or not to.strip():
        raise EmailDeliveryError("Recipient address is empty")
    logger.info(
        "Sending email from=%s to=%s subject=%r body_length=%s",
        sender or "-",
        to,
        subject,
        len(body),
    )
    return True


def build_reset_link(token: str, settings: "Settings") -> str:
    return f"{settings.FRONTEND_URL}/reset-password/{token}"


def send_password_reset_email(to: str, token: str, settings: "Settings") -> bool:
    """Send the reset link for token to the account address."""
    link = build_reset_link(token, settings)
    body = f"Please click on the following link to reset your password: {link}"
    return send_email(to, PASSWORD_RESET_SUBJECT, body, sender=settings.EMAIL_FROM)
