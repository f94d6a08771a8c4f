"""Category lookups and administrative curation."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..core.time import isoformat_utc, utcnow
from ..models import Category, Leaderboard, Run
from ..schemas.categories import CreateCategoryRequest, UpdateCategoryRequest
from .results import AlreadyDeleted, Conflict, NeverDeleted, NotFound, Success

logger = logging.getLogger(__name__)

CreateCategoryResult = Union[Category, Conflict[Category], NotFound]
UpdateCategoryResult = Union[Success, Conflict[Category], NotFound]
DeleteCategoryResult = Union[Success, AlreadyDeleted, NotFound]
RestoreCategoryResult = Union[Category, Conflict[Category], NeverDeleted, NotFound]


def get_category(session: Session, category_id: int) -> Optional[Category]:
    """Return the category including soft-deleted ones."""

    return session.get(Category, category_id)


def get_category_by_slug(
    session: Session, leaderboard_id: int, slug: str
) -> Optional[Category]:
    return _live_category_with_slug(session, leaderboard_id, slug)


def get_category_for_run(session: Session, run: Run) -> Optional[Category]:
    return session.get(Category, run.category_id)


def _live_category_with_slug(
    session: Session,
    leaderboard_id: int,
    slug: str,
    *,
    exclude_id: Optional[int] = None,
) -> Optional[Category]:
    query = select(Category).where(
        Category.leaderboard_id == leaderboard_id,
        Category.slug == slug,
        Category.deleted_at.is_(None),
    )
    if exclude_id is not None:
        query = query.where(Category.id != exclude_id)
    return session.exec(query).first()


def _commit_or_conflict(
    session: Session,
    leaderboard_id: int,
    slug: str,
    *,
    exclude_id: Optional[int] = None,
) -> Optional[Conflict[Category]]:
    """Commit, turning a lost race on a live slug into a ``Conflict``."""

    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        existing = _live_category_with_slug(
            session, leaderboard_id, slug, exclude_id=exclude_id
        )
        if existing is None:
            raise
        logger.info(f"Slug {slug!r} on leaderboard {leaderboard_id} was taken concurrently")
        return Conflict(existing)
    return None


def create_category(
    session: Session, leaderboard_id: int, request: CreateCategoryRequest
) -> CreateCategoryResult:
    leaderboard = session.get(Leaderboard, leaderboard_id)
    if not leaderboard:
        return NotFound("Leaderboard Not Found")

    existing = _live_category_with_slug(session, leaderboard_id, request.slug)
    if existing:
        return Conflict(existing)

    category = Category(
        leaderboard_id=leaderboard_id,
        name=request.name,
        slug=request.slug,
        info=request.info,
        type=request.run_type,
        sort_direction=request.sort_direction,
    )
    session.add(category)
    conflict = _commit_or_conflict(session, leaderboard_id, request.slug)
    if conflict:
        return conflict
    session.refresh(category)
    logger.info(
        f"Created category {category.id} ({category.slug}) on leaderboard {leaderboard_id}"
    )
    return category


def update_category(
    session: Session, category_id: int, request: UpdateCategoryRequest
) -> UpdateCategoryResult:
    category = session.get(Category, category_id)
    if not category:
        return NotFound("Category Not Found")

    if request.slug is not None and request.slug != category.slug:
        existing = _live_category_with_slug(
            session, category.leaderboard_id, request.slug, exclude_id=category.id
        )
        if existing:
            return Conflict(existing)

    for name, value in request.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(category, name, value)
    category.updated_at = utcnow()
    session.add(category)
    conflict = _commit_or_conflict(
        session, category.leaderboard_id, category.slug, exclude_id=category.id
    )
    if conflict:
        return conflict
    return Success()


def delete_category(session: Session, category_id: int) -> DeleteCategoryResult:
    category = session.get(Category, category_id)
    if not category:
        return NotFound("Category Not Found")
    if category.deleted_at is not None:
        return AlreadyDeleted()

    category.deleted_at = utcnow()
    session.add(category)
    session.commit()
    logger.info(f"Deleted category {category_id}")
    return Success()


def restore_category(session: Session, category_id: int) -> RestoreCategoryResult:
    category = session.get(Category, category_id)
    if not category:
        return NotFound("Category Not Found")
    if category.deleted_at is None:
        return NeverDeleted()

    existing = _live_category_with_slug(
        session, category.leaderboard_id, category.slug, exclude_id=category.id
    )
    if existing:
        return Conflict(existing)

    category.deleted_at = None
    category.updated_at = utcnow()
    session.add(category)
    conflict = _commit_or_conflict(
        session, category.leaderboard_id, category.slug, exclude_id=category.id
    )
    if conflict:
        return conflict
    session.refresh(category)
    logger.info(f"Restored category {category_id}")
    return category


def category_to_dict(category: Category) -> Dict[str, Any]:
    """Serialise a category model to API-friendly dict."""

    return {
        "id": category.id,
        "leaderboardId": category.leaderboard_id,
        "name": category.name,
        "slug": category.slug,
        "info": category.info,
        "type": category.type.value,
        "sortDirection": category.sort_direction.value,
        "createdAt": isoformat_utc(category.created_at),
        "updatedAt": isoformat_utc(category.updated_at),
        "deletedAt": isoformat_utc(category.deleted_at),
    }


__all__ = [
    "CreateCategoryResult",
    "DeleteCategoryResult",
    "RestoreCategoryResult",
    "UpdateCategoryResult",
    "category_to_dict",
    "create_category",
    "delete_category",
    "get_category",
    "get_category_by_slug",
    "get_category_for_run",
    "restore_category",
    "update_category",
]
