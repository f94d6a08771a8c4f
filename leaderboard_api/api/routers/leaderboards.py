"""Leaderboard endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse
from sqlmodel import Session

from ...core import get_session
from ...models import Leaderboard, User
from ...schemas.categories import CreateLeaderboardRequest
from ...services import leaderboards as leaderboard_service
from ...services.leaderboards import leaderboard_to_dict
from ..deps import require_admin

router = APIRouter(tags=["leaderboards"])


@router.get("/api/leaderboard/{leaderboard_id}", name="get_leaderboard")
def get_leaderboard(leaderboard_id: int, session: Session = Depends(get_session)):
    leaderboard = leaderboard_service.get_leaderboard(session, leaderboard_id)
    if not leaderboard:
        raise HTTPException(404, "Leaderboard Not Found")
    return leaderboard_to_dict(leaderboard)


@router.get("/api/leaderboard")
def get_leaderboard_by_slug(
    slug: str = Query(..., min_length=1), session: Session = Depends(get_session)
):
    leaderboard = leaderboard_service.get_leaderboard_by_slug(session, slug)
    if not leaderboard:
        raise HTTPException(404, "Leaderboard Not Found")
    return leaderboard_to_dict(leaderboard)


@router.get("/api/leaderboards")
def list_leaderboards(session: Session = Depends(get_session)):
    return [
        leaderboard_to_dict(leaderboard)
        for leaderboard in leaderboard_service.list_leaderboards(session)
    ]


@router.post("/leaderboards/create", status_code=status.HTTP_201_CREATED)
def create_leaderboard(
    body: CreateLeaderboardRequest,
    request: Request,
    admin: User = Depends(require_admin),
    session: Session = Depends(get_session),
):
    """Create a leaderboard. Administrators only."""

    result = leaderboard_service.create_leaderboard(session, body)
    if isinstance(result, Leaderboard):
        return JSONResponse(
            leaderboard_to_dict(result),
            status_code=status.HTTP_201_CREATED,
            headers={
                "Location": str(
                    request.url_for("get_leaderboard", leaderboard_id=result.id)
                )
            },
        )
    return JSONResponse(
        {
            "detail": "A leaderboard with this slug already exists",
            "conflicting": leaderboard_to_dict(result.conflicting),
        },
        status_code=status.HTTP_409_CONFLICT,
    )


__all__ = ["router"]
