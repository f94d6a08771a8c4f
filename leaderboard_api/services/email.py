"""Outgoing email dispatch."""

from __future__ import annotations

import logging
import smtplib
from abc import ABC, abstractmethod
from email.message import EmailMessage
from functools import lru_cache

from ..core.config import (
    EMAIL_BACKEND,
    EMAIL_FROM,
    SMTP_HOST,
    SMTP_PASSWORD,
    SMTP_PORT,
    SMTP_STARTTLS,
    SMTP_USERNAME,
)

logger = logging.getLogger(__name__)


class EmailDeliveryError(RuntimeError):
    """Raised when a message could not be handed off for delivery."""


class EmailSender(ABC):
    """Hands messages to a delivery backend.

    ``enqueue`` returns once the backend has accepted the message and raises
    :class:`EmailDeliveryError` otherwise; delivery itself is not awaited.
    """

    @abstractmethod
    def enqueue(self, recipient: str, subject: str, html_body: str) -> None:
        ...


class LogEmailSender(EmailSender):
    """Development backend that only writes messages to the log."""

    def enqueue(self, recipient: str, subject: str, html_body: str) -> None:
        logger.info(f"Email to {recipient}: {subject}\n{html_body}")


class SmtpEmailSender(EmailSender):
    def __init__(
        self,
        host: str = SMTP_HOST,
        port: int = SMTP_PORT,
        username: str | None = SMTP_USERNAME,
        password: str | None = SMTP_PASSWORD,
        starttls: bool = SMTP_STARTTLS,
        sender: str = EMAIL_FROM,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.starttls = starttls
        self.sender = sender

    def enqueue(self, recipient: str, subject: str, html_body: str) -> None:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = recipient
        message["Subject"] = subject
        message.set_content(html_body, subtype="html")

        try:
            with smtplib.SMTP(self.host, self.port, timeout=10) as smtp:
                if self.starttls:
                    smtp.starttls()
                if self.username and self.password:
                    smtp.login(self.username, self.password)
                smtp.send_message(message)
        except (OSError, smtplib.SMTPException) as exc:
            logger.warning(f"Could not hand off email to {recipient}: {exc}")
            raise EmailDeliveryError(str(exc)) from exc


@lru_cache(maxsize=1)
def get_email_sender() -> EmailSender:
    """FastAPI dependency returning the configured email backend."""

    if EMAIL_BACKEND == "smtp":
        return SmtpEmailSender()
    return LogEmailSender()


__all__ = [
    "EmailDeliveryError",
    "EmailSender",
    "LogEmailSender",
    "SmtpEmailSender",
    "get_email_sender",
]
