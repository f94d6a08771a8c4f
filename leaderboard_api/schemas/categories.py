"""Request contracts for leaderboard and category curation."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from ..models import RunType, SortDirection
from .base import RequestModel

SLUG_PATTERN = r"^[a-zA-Z0-9\-_]+$"


class CreateLeaderboardRequest(RequestModel):
    name: str = Field(min_length=1, max_length=80)
    slug: str = Field(min_length=2, max_length=80, pattern=SLUG_PATTERN)
    info: str = ""


class CreateCategoryRequest(RequestModel):
    name: str = Field(min_length=1, max_length=80)
    slug: str = Field(min_length=2, max_length=80, pattern=SLUG_PATTERN)
    info: str = ""
    sort_direction: SortDirection
    run_type: RunType


class UpdateCategoryRequest(RequestModel):
    """Partial update; the run type is fixed once the category exists."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=80)
    slug: Optional[str] = Field(
        default=None, min_length=2, max_length=80, pattern=SLUG_PATTERN
    )
    info: Optional[str] = None
    sort_direction: Optional[SortDirection] = None


__all__ = [
    "CreateCategoryRequest",
    "CreateLeaderboardRequest",
    "SLUG_PATTERN",
    "UpdateCategoryRequest",
]
