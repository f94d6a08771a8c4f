"""Account confirmation and recovery links delivered by email.

Both flows are all-or-nothing: the link row is only committed once the email
backend has accepted the message, and a rejected hand-off leaves the database
untouched.
"""

from __future__ import annotations

import logging
import uuid
from datetime import timedelta
from typing import Union
from urllib.parse import urlencode

from sqlmodel import Session

from ..core.config import CONFIRMATION_TTL_MINUTES, RECOVERY_TTL_MINUTES, WEBSITE_URL
from ..core.ids import encode_id
from ..core.security import hash_password
from ..core.time import as_utc, utcnow
from ..models import AccountConfirmation, AccountRecovery, User, UserRole
from .email import EmailDeliveryError, EmailSender
from .results import (
    AlreadyUsed,
    BadRole,
    EmailFailed,
    Expired,
    NotFound,
    Success,
    UserBanned,
    UserNotFound,
)
from .users import get_user_by_username

logger = logging.getLogger(__name__)

CreateConfirmationResult = Union[AccountConfirmation, BadRole, EmailFailed]
ConfirmAccountResult = Union[Success, BadRole, NotFound, AlreadyUsed, Expired]
CreateRecoveryResult = Union[AccountRecovery, UserBanned, UserNotFound, EmailFailed]
CheckRecoveryResult = Union[AccountRecovery, NotFound, AlreadyUsed, Expired, UserBanned]
ResetPasswordResult = Union[Success, NotFound, AlreadyUsed, Expired, UserBanned]


def _website_link(path: str, code: uuid.UUID) -> str:
    return f"{WEBSITE_URL.rstrip('/')}/{path}?{urlencode({'code': encode_id(code)})}"


def create_confirmation_and_send_email(
    session: Session, sender: EmailSender, user: User
) -> CreateConfirmationResult:
    if user.role != UserRole.REGISTERED:
        return BadRole()

    now = utcnow()
    confirmation = AccountConfirmation(
        user_id=user.id,
        created_at=now,
        expires_at=now + timedelta(minutes=CONFIRMATION_TTL_MINUTES),
    )
    link = _website_link("confirm-account", confirmation.id)

    try:
        sender.enqueue(
            user.email,
            "Confirm Your Account",
            f'Hi {user.username},<br/><br/>Click <a href="{link}">here</a> to confirm your account.',
        )
    except EmailDeliveryError:
        logger.warning(f"Account confirmation email for user {user.id} was not queued")
        return EmailFailed()

    session.add(confirmation)
    session.commit()
    session.refresh(confirmation)
    logger.info(f"Issued account confirmation {confirmation.id} for user {user.id}")
    return confirmation


def confirm_account(session: Session, confirmation_id: uuid.UUID) -> ConfirmAccountResult:
    confirmation = session.get(AccountConfirmation, confirmation_id)
    if not confirmation:
        return NotFound()
    if confirmation.used_at is not None:
        return AlreadyUsed()
    if as_utc(confirmation.expires_at) <= utcnow():
        return Expired()

    user = session.get(User, confirmation.user_id)
    if not user:
        return NotFound()
    if user.role != UserRole.REGISTERED:
        return BadRole()

    confirmation.used_at = utcnow()
    user.role = UserRole.CONFIRMED
    session.add(confirmation)
    session.add(user)
    session.commit()
    logger.info(f"User {user.id} confirmed their account")
    return Success()


def create_recovery_and_send_email(
    session: Session, sender: EmailSender, username: str, email: str
) -> CreateRecoveryResult:
    user = get_user_by_username(session, username)
    if not user or user.email.lower() != email.strip().lower():
        return UserNotFound()
    if user.role == UserRole.BANNED:
        return UserBanned()

    now = utcnow()
    recovery = AccountRecovery(
        user_id=user.id,
        created_at=now,
        expires_at=now + timedelta(minutes=RECOVERY_TTL_MINUTES),
    )
    link = _website_link("reset-password", recovery.id)

    try:
        sender.enqueue(
            user.email,
            "Password Reset Request",
            f'Hi {user.username},<br/><br/>Click <a href="{link}">here</a> to reset your password.',
        )
    except EmailDeliveryError:
        logger.warning(f"Account recovery email for user {user.id} was not queued")
        return EmailFailed()

    session.add(recovery)
    session.commit()
    session.refresh(recovery)
    logger.info(f"Issued account recovery {recovery.id} for user {user.id}")
    return recovery


def check_recovery(session: Session, recovery_id: uuid.UUID) -> CheckRecoveryResult:
    """Check that a recovery link can still be used, without consuming it."""

    recovery = session.get(AccountRecovery, recovery_id)
    if not recovery:
        return NotFound()
    if recovery.used_at is not None:
        return AlreadyUsed()
    if as_utc(recovery.expires_at) <= utcnow():
        return Expired()

    user = session.get(User, recovery.user_id)
    if not user:
        return NotFound()
    if user.role == UserRole.BANNED:
        return UserBanned()
    return recovery


def reset_password(
    session: Session, recovery_id: uuid.UUID, password: str
) -> ResetPasswordResult:
    checked = check_recovery(session, recovery_id)
    if not isinstance(checked, AccountRecovery):
        return checked

    user = session.get(User, checked.user_id)
    user.password = hash_password(password)
    checked.used_at = utcnow()
    session.add(user)
    session.add(checked)
    session.commit()
    logger.info(f"User {user.id} reset their password")
    return Success()


__all__ = [
    "ConfirmAccountResult",
    "CreateConfirmationResult",
    "CreateRecoveryResult",
    "ResetPasswordResult",
    "CheckRecoveryResult",
    "confirm_account",
    "create_confirmation_and_send_email",
    "create_recovery_and_send_email",
    "reset_password",
    "check_recovery",
]
