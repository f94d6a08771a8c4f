"""Authentication dependencies shared by the routers."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from ..core import get_session
from ..models import User, UserRole
from ..services.users import GetUserResult, get_user_from_token

_bearer = HTTPBearer(auto_error=False)


def get_user_from_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    session: Session = Depends(get_session),
) -> GetUserResult:
    """Resolve the bearer token into a user or the reason it failed."""

    token = credentials.credentials if credentials else None
    return get_user_from_token(session, token)


def require_user(result: GetUserResult = Depends(get_user_from_claims)) -> User:
    if not isinstance(result, User):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return result


def require_admin(user: User = Depends(require_user)) -> User:
    if user.role != UserRole.ADMINISTRATOR:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator role required",
        )
    return user


__all__ = ["get_user_from_claims", "require_admin", "require_user"]
