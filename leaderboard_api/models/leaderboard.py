"""Database models for leaderboards and their categories."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Index, text
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class RunType(str, Enum):
    """How the single numeric value of a run is interpreted."""

    TIME = "Time"
    SCORE = "Score"


class SortDirection(str, Enum):
    ASCENDING = "Ascending"
    DESCENDING = "Descending"


class Leaderboard(SQLModel, table=True):
    """Top-level grouping of categories for one game."""

    id: Optional[int] = ORMField(default=None, primary_key=True)
    name: str
    slug: str = ORMField(index=True, unique=True)
    info: str = ""
    created_at: datetime = ORMField(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None


class Category(SQLModel, table=True):
    """Ranking configuration under a leaderboard.

    ``slug`` is unique among the non-deleted categories of a leaderboard.
    The partial index only covers live rows so retired slugs can be reused.
    """

    __table_args__ = (
        Index(
            "ix_category_live_slug",
            "leaderboard_id",
            "slug",
            unique=True,
            sqlite_where=text("deleted_at IS NULL"),
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )

    id: Optional[int] = ORMField(default=None, primary_key=True)
    leaderboard_id: int = ORMField(foreign_key="leaderboard.id", index=True)
    name: str
    slug: str = ORMField(index=True)
    info: str = ""
    type: RunType
    sort_direction: SortDirection
    created_at: datetime = ORMField(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None


__all__ = ["Category", "Leaderboard", "RunType", "SortDirection"]
