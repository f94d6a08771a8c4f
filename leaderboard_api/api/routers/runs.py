"""Run submission and lookup endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse
from sqlmodel import Session

from ...core import PAGE_LIMIT_DEFAULT, PAGE_LIMIT_MAX, decode_id, encode_id, get_session
from ...models import Run, User
from ...schemas.runs import Page, RunSort
from ...services.categories import category_to_dict, get_category, get_category_for_run
from ...services.results import BadRole, NotFound, Unprocessable
from ...services.runs import create_run, get_run, get_runs_for_category, run_to_view
from ...services.users import GetUserResult
from ..deps import get_user_from_claims

router = APIRouter(tags=["runs"])


def _lookup_run(session: Session, run_id: str) -> Run:
    decoded = decode_id(run_id)
    run = get_run(session, decoded) if decoded else None
    if run is None:
        raise HTTPException(404, "Run Not Found")
    return run


@router.get("/api/run/{run_id}", name="get_run")
def get_run_route(run_id: str, session: Session = Depends(get_session)):
    """Get a run by its URL-safe id."""

    run = _lookup_run(session, run_id)
    return run_to_view(run, get_category_for_run(session, run))


@router.post("/category/{category_id}/runs/create", status_code=status.HTTP_201_CREATED)
def create_run_route(
    category_id: int,
    request: Request,
    payload: Any = Body(None),
    claims: GetUserResult = Depends(get_user_from_claims),
    session: Session = Depends(get_session),
):
    """Create a run in a category. Restricted to confirmed users and administrators."""

    if not isinstance(claims, User):
        raise HTTPException(
            status.HTTP_401_UNAUTHORIZED,
            "Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    result = create_run(session, claims, category_id, payload)

    if isinstance(result, Run):
        view = run_to_view(result, get_category(session, result.category_id))
        location = request.url_for("get_run", run_id=encode_id(result.id))
        return JSONResponse(
            view,
            status_code=status.HTTP_201_CREATED,
            headers={"Location": str(location)},
        )
    if isinstance(result, BadRole):
        raise HTTPException(status.HTTP_403_FORBIDDEN, "Role may not create runs")
    if isinstance(result, NotFound):
        raise HTTPException(status.HTTP_404_NOT_FOUND, result.title)
    if isinstance(result, Unprocessable):
        raise HTTPException(422, {"title": result.detail, "errors": result.errors})
    raise TypeError(f"Unhandled run creation result: {result!r}")


@router.get("/api/category/{category_id}/runs")
def get_runs_for_category_route(
    category_id: int,
    limit: int = Query(PAGE_LIMIT_DEFAULT, ge=0),
    offset: int = Query(0, ge=0),
    include_deleted: bool = Query(False, alias="includeDeleted"),
    sort: RunSort = Query(RunSort.PLAYED_ON),
    session: Session = Depends(get_session),
):
    """List a category's runs, oldest play date first unless sorted by rank."""

    result = get_runs_for_category(
        session, category_id, Page(limit=limit, offset=offset), include_deleted, sort
    )
    if isinstance(result, NotFound):
        raise HTTPException(status.HTTP_404_NOT_FOUND, result.title)

    category = get_category(session, category_id)
    return {
        "data": [run_to_view(run, category) for run in result.items],
        "total": result.total,
        "limitDefault": PAGE_LIMIT_DEFAULT,
        "limitMax": PAGE_LIMIT_MAX,
    }


@router.get("/api/run/{run_id}/category")
def get_category_for_run_route(run_id: str, session: Session = Depends(get_session)):
    """Get the category a run belongs to."""

    run = _lookup_run(session, run_id)
    category = get_category_for_run(session, run)
    if not category:
        raise HTTPException(404, "Category Not Found")
    return category_to_dict(category)


__all__ = ["router"]
