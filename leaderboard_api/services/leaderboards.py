"""Leaderboard lookups and creation."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..core.time import isoformat_utc
from ..models import Leaderboard
from ..schemas.categories import CreateLeaderboardRequest
from .results import Conflict

logger = logging.getLogger(__name__)

CreateLeaderboardResult = Union[Leaderboard, Conflict[Leaderboard]]


def get_leaderboard(session: Session, leaderboard_id: int) -> Optional[Leaderboard]:
    return session.get(Leaderboard, leaderboard_id)


def get_leaderboard_by_slug(session: Session, slug: str) -> Optional[Leaderboard]:
    return session.exec(
        select(Leaderboard).where(
            Leaderboard.slug == slug, Leaderboard.deleted_at.is_(None)
        )
    ).first()


def _leaderboard_with_slug(session: Session, slug: str) -> Optional[Leaderboard]:
    return session.exec(select(Leaderboard).where(Leaderboard.slug == slug)).first()


def list_leaderboards(session: Session) -> List[Leaderboard]:
    return list(
        session.exec(
            select(Leaderboard)
            .where(Leaderboard.deleted_at.is_(None))
            .order_by(Leaderboard.id)
        ).all()
    )


def create_leaderboard(
    session: Session, request: CreateLeaderboardRequest
) -> CreateLeaderboardResult:
    """Persist a new leaderboard unless its slug is already taken."""

    existing = _leaderboard_with_slug(session, request.slug)
    if existing:
        return Conflict(existing)

    leaderboard = Leaderboard(name=request.name, slug=request.slug, info=request.info)
    session.add(leaderboard)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        existing = _leaderboard_with_slug(session, request.slug)
        if existing is None:
            raise
        return Conflict(existing)
    session.refresh(leaderboard)
    logger.info(f"Created leaderboard {leaderboard.id} ({leaderboard.slug})")
    return leaderboard


def leaderboard_to_dict(leaderboard: Leaderboard) -> Dict[str, Any]:
    """Serialise a leaderboard model to API-friendly dict."""

    return {
        "id": leaderboard.id,
        "name": leaderboard.name,
        "slug": leaderboard.slug,
        "info": leaderboard.info,
        "createdAt": isoformat_utc(leaderboard.created_at),
        "updatedAt": isoformat_utc(leaderboard.updated_at),
        "deletedAt": isoformat_utc(leaderboard.deleted_at),
    }


__all__ = [
    "CreateLeaderboardResult",
    "create_leaderboard",
    "get_leaderboard",
    "get_leaderboard_by_slug",
    "leaderboard_to_dict",
    "list_leaderboards",
]
