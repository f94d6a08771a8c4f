"""Registration, login and user profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlmodel import Session

from ...core import decode_id, get_session
from ...models import User
from ...schemas.users import LoginRequest, RegisterRequest
from ...services import users as user_service
from ...services.results import BadCredentials, UserBanned, UserNotFound
from ...services.users import user_to_dict
from ..deps import require_user

router = APIRouter(tags=["users"])


@router.post("/api/users/register", status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, session: Session = Depends(get_session)):
    """Register a new account."""

    result = user_service.create_user(session, body)
    if isinstance(result, User):
        return JSONResponse(user_to_dict(result), status_code=status.HTTP_201_CREATED)
    return JSONResponse(
        {
            "detail": "Username or email already in use",
            "errors": {field: ["Already taken"] for field in result.conflicting},
        },
        status_code=status.HTTP_409_CONFLICT,
    )


@router.post("/login")
def login(body: LoginRequest, session: Session = Depends(get_session)):
    """Exchange an email and password for a bearer token."""

    result = user_service.login(session, body)
    if isinstance(result, str):
        return {"token": result}
    if isinstance(result, UserNotFound):
        raise HTTPException(404, "User Not Found")
    if isinstance(result, BadCredentials):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid credentials")
    if isinstance(result, UserBanned):
        raise HTTPException(status.HTTP_403_FORBIDDEN, "User is banned")
    raise TypeError(f"Unhandled login result: {result!r}")


@router.get("/api/users/me")
def me(user: User = Depends(require_user)):
    """Get the currently logged-in user."""

    return user_to_dict(user)


@router.get("/api/users/{user_id}")
def get_user(user_id: str, session: Session = Depends(get_session)):
    decoded = decode_id(user_id)
    user = user_service.get_user_by_id(session, decoded) if decoded else None
    if not user:
        raise HTTPException(404, "User Not Found")
    return user_to_dict(user)


__all__ = ["router"]
