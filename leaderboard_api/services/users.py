"""User directory: registration, lookup and login."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional, Union

import jwt
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, func, select

from ..core.config import ADMIN_EMAILS
from ..core.ids import decode_id, encode_id
from ..core.security import create_access_token, decode_access_token, hash_password, verify_password
from ..core.time import isoformat_utc
from ..models import User, UserRole
from ..schemas.users import LoginRequest, RegisterRequest
from .results import BadCredentials, Conflict, UserBanned, UserNotFound

logger = logging.getLogger(__name__)

_ADMIN_EMAILS = {email.strip().lower() for email in ADMIN_EMAILS if email}

CreateUserResult = Union[User, Conflict[List[str]]]
LoginResult = Union[str, BadCredentials, UserBanned, UserNotFound]
GetUserResult = Union[User, BadCredentials, UserNotFound]


def get_user_by_id(session: Session, user_id: uuid.UUID) -> Optional[User]:
    return session.get(User, user_id)


def get_user_by_email(session: Session, email: str) -> Optional[User]:
    normalized = (email or "").strip().lower()
    return session.exec(select(User).where(func.lower(User.email) == normalized)).first()


def get_user_by_username(session: Session, username: str) -> Optional[User]:
    normalized = (username or "").strip().lower()
    return session.exec(
        select(User).where(func.lower(User.username) == normalized)
    ).first()


def _taken_fields(session: Session, username: str, email: str) -> List[str]:
    taken: List[str] = []
    if get_user_by_username(session, username):
        taken.append("username")
    if get_user_by_email(session, email):
        taken.append("email")
    return taken


def create_user(session: Session, request: RegisterRequest) -> CreateUserResult:
    """Register a new account; the conflict lists the fields already taken."""

    email = request.email.strip().lower()
    conflicts = _taken_fields(session, request.username, email)
    if conflicts:
        return Conflict(conflicts)

    role = UserRole.ADMINISTRATOR if email in _ADMIN_EMAILS else UserRole.REGISTERED
    user = User(
        username=request.username,
        email=email,
        password=hash_password(request.password),
        role=role,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        conflicts = _taken_fields(session, request.username, email)
        if not conflicts:
            raise
        logger.info(f"Registration for {request.username!r} lost a race: {conflicts}")
        return Conflict(conflicts)
    session.refresh(user)
    logger.info(f"Registered user {user.id} with role {role.value}")
    return user


def login(session: Session, request: LoginRequest) -> LoginResult:
    """Check credentials and return a signed bearer token."""

    user = get_user_by_email(session, request.email)
    if not user:
        return UserNotFound()
    if not verify_password(request.password, user.password):
        return BadCredentials()
    if user.role == UserRole.BANNED:
        return UserBanned()

    logger.info(f"User {user.id} logged in")
    return create_access_token(encode_id(user.id))


def get_user_from_token(session: Session, token: Optional[str]) -> GetUserResult:
    """Resolve the user named by a bearer token's ``sub`` claim."""

    if not token:
        return BadCredentials()
    try:
        claims = decode_access_token(token)
    except jwt.InvalidTokenError:
        return BadCredentials()

    user_id = decode_id(str(claims.get("sub", "")))
    if user_id is None:
        return BadCredentials()

    user = session.get(User, user_id)
    if not user:
        return UserNotFound()
    return user


def user_to_dict(user: User) -> Dict[str, Any]:
    """Serialise a user model to API-friendly dict."""

    return {
        "id": encode_id(user.id),
        "username": user.username,
        "role": user.role.value,
        "createdAt": isoformat_utc(user.created_at),
    }


__all__ = [
    "CreateUserResult",
    "GetUserResult",
    "LoginResult",
    "create_user",
    "get_user_by_email",
    "get_user_by_id",
    "get_user_by_username",
    "get_user_from_token",
    "login",
    "user_to_dict",
]
