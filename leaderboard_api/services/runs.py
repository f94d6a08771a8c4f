"""Run submission, lookup and listing."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError
from sqlmodel import Session, func, select

from ..core.durations import format_duration
from ..core.ids import encode_id
from ..core.time import isoformat_utc
from ..models import Category, Run, RunType, SortDirection, User, UserRole
from ..schemas.runs import (
    CreateTimedRunRequest,
    Page,
    RunSort,
    create_run_request_adapter,
)
from .results import BadRole, ListResult, NotFound, Unprocessable, errors_from_validation

logger = logging.getLogger(__name__)

CreateRunResult = Union[Run, BadRole, NotFound, Unprocessable]
GetRunsForCategoryResult = Union[ListResult[Run], NotFound]

RUN_SUBMITTER_ROLES = frozenset({UserRole.CONFIRMED, UserRole.ADMINISTRATOR})


def get_run(session: Session, run_id: uuid.UUID) -> Optional[Run]:
    """Return the run with ``run_id`` unless it is unknown or soft-deleted."""

    run = session.get(Run, run_id)
    if run is None or run.deleted_at is not None:
        return None
    return run


def create_run(
    session: Session, user: User, category_id: int, payload: Any
) -> CreateRunResult:
    """Validate ``payload`` against the category and persist a new run.

    The role gate runs first so that unprivileged users are refused no
    matter what they submit. Nothing is written unless every check passes.
    """

    if user.role not in RUN_SUBMITTER_ROLES:
        return BadRole()

    category = session.get(Category, category_id)
    if category is None:
        return NotFound("Category Not Found")
    if category.deleted_at is not None:
        return NotFound("Category Is Deleted")

    try:
        request = create_run_request_adapter.validate_python(payload)
    except ValidationError as exc:
        return Unprocessable("Invalid run submission", errors_from_validation(exc))

    if request.run_type != category.type.value:
        return Unprocessable(
            "Run type does not match category",
            {"runType": [f"Category {category.id} only accepts {category.type.value} runs"]},
        )

    if isinstance(request, CreateTimedRunRequest):
        time_or_score = request.time
    else:
        time_or_score = request.score

    run = Run(
        category_id=category.id,
        user_id=user.id,
        info=request.info,
        played_on=request.played_on,
        time_or_score=time_or_score,
    )
    session.add(run)
    session.commit()
    session.refresh(run)
    logger.info(f"User {user.id} created run {run.id} in category {category.id}")
    return run


def get_runs_for_category(
    session: Session,
    category_id: int,
    page: Page,
    include_deleted: bool = False,
    sort: RunSort = RunSort.PLAYED_ON,
) -> GetRunsForCategoryResult:
    """Return one page of a category's runs plus the filtered total.

    Deleted categories stay browsable; deleted runs are hidden unless
    ``include_deleted`` is set.
    """

    category = session.get(Category, category_id)
    if category is None:
        return NotFound("Category Not Found")

    filters = [Run.category_id == category_id]
    if not include_deleted:
        filters.append(Run.deleted_at.is_(None))

    total = session.exec(select(func.count()).select_from(Run).where(*filters)).one()

    query = select(Run).where(*filters)
    if sort == RunSort.RANK:
        value_order = (
            Run.time_or_score.desc()
            if category.sort_direction == SortDirection.DESCENDING
            else Run.time_or_score.asc()
        )
        query = query.order_by(value_order, Run.played_on.asc(), Run.created_at.asc())
    else:
        query = query.order_by(Run.played_on.asc(), Run.created_at.asc())

    runs = session.exec(query.offset(page.offset).limit(page.effective_limit)).all()
    return ListResult(items=list(runs), total=total)


def run_to_view(run: Run, category: Optional[Category]) -> Dict[str, Any]:
    """Serialise a run as a timed or scored view according to its category.

    The category must already be resolved by the caller.
    """

    if category is None or category.id != run.category_id:
        raise ValueError(
            f"Run {run.id} must be mapped with its own category ({run.category_id})"
        )

    view: Dict[str, Any] = {
        "id": encode_id(run.id),
        "type": category.type.value,
        "categoryId": run.category_id,
        "userId": encode_id(run.user_id),
        "info": run.info,
        "playedOn": run.played_on.isoformat(),
        "createdAt": isoformat_utc(run.created_at),
        "updatedAt": isoformat_utc(run.updated_at),
        "deletedAt": isoformat_utc(run.deleted_at),
    }
    if category.type == RunType.TIME:
        view["time"] = format_duration(run.time_or_score)
    else:
        view["score"] = run.time_or_score
    return view


__all__ = [
    "CreateRunResult",
    "GetRunsForCategoryResult",
    "RUN_SUBMITTER_ROLES",
    "create_run",
    "get_run",
    "get_runs_for_category",
    "run_to_view",
]
