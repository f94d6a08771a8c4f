"""Account confirmation and recovery endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from ...core import decode_id, get_session
from ...models import AccountConfirmation, AccountRecovery, User
from ...schemas.users import ChangePasswordRequest, RecoverAccountRequest
from ...services import accounts as account_service
from ...services.email import EmailSender, get_email_sender
from ...services.results import (
    AlreadyUsed,
    BadRole,
    EmailFailed,
    Expired,
    NotFound,
    Success,
    UserBanned,
)
from ..deps import require_user

router = APIRouter(tags=["account"])


def _link_id_or_404(token: str) -> uuid.UUID:
    decoded = decode_id(token)
    if decoded is None:
        raise HTTPException(404, "Not Found")
    return decoded


def _raise_for_link_failure(result) -> None:
    if isinstance(result, NotFound):
        raise HTTPException(404, "Not Found")
    if isinstance(result, (AlreadyUsed, Expired)):
        raise HTTPException(status.HTTP_410_GONE, "Link has expired or was already used")
    if isinstance(result, UserBanned):
        raise HTTPException(status.HTTP_403_FORBIDDEN, "User is banned")
    raise TypeError(f"Unhandled account link result: {result!r}")


@router.post("/account/confirm")
def request_confirmation(
    user: User = Depends(require_user),
    sender: EmailSender = Depends(get_email_sender),
    session: Session = Depends(get_session),
):
    """Email the current user a link that confirms their account."""

    result = account_service.create_confirmation_and_send_email(session, sender, user)
    if isinstance(result, AccountConfirmation):
        return {"ok": True}
    if isinstance(result, BadRole):
        raise HTTPException(status.HTTP_409_CONFLICT, "Account is already confirmed")
    if isinstance(result, EmailFailed):
        raise HTTPException(500, "Could not send the confirmation email")
    raise TypeError(f"Unhandled confirmation result: {result!r}")


@router.put("/account/confirm/{confirmation_id}")
def confirm_account(confirmation_id: str, session: Session = Depends(get_session)):
    """Consume a confirmation link and promote the user to Confirmed."""

    result = account_service.confirm_account(session, _link_id_or_404(confirmation_id))
    if isinstance(result, Success):
        return {"ok": True}
    if isinstance(result, BadRole):
        raise HTTPException(status.HTTP_409_CONFLICT, "Account cannot be confirmed")
    if isinstance(result, AlreadyUsed):
        raise HTTPException(status.HTTP_409_CONFLICT, "Confirmation was already used")
    if isinstance(result, Expired):
        raise HTTPException(status.HTTP_410_GONE, "Confirmation has expired")
    _raise_for_link_failure(result)


@router.post("/account/recover")
def request_recovery(
    body: RecoverAccountRequest,
    sender: EmailSender = Depends(get_email_sender),
    session: Session = Depends(get_session),
):
    """Email a password reset link if the username and email match an account.

    The response does not reveal whether an account matched.
    """

    result = account_service.create_recovery_and_send_email(
        session, sender, body.username, body.email
    )
    if isinstance(result, EmailFailed):
        raise HTTPException(500, "Could not send the recovery email")
    return {"ok": True}


@router.get("/account/recover/{recovery_id}")
def check_recovery(recovery_id: str, session: Session = Depends(get_session)):
    """Report whether a recovery link is still usable."""

    result = account_service.check_recovery(session, _link_id_or_404(recovery_id))
    if isinstance(result, AccountRecovery):
        return {"ok": True}
    _raise_for_link_failure(result)


@router.post("/account/recover/{recovery_id}")
def reset_password(
    recovery_id: str,
    body: ChangePasswordRequest,
    session: Session = Depends(get_session),
):
    """Set a new password through a recovery link."""

    result = account_service.reset_password(
        session, _link_id_or_404(recovery_id), body.password
    )
    if isinstance(result, Success):
        return {"ok": True}
    _raise_for_link_failure(result)


__all__ = ["router"]
