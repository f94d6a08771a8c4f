"""Category lookup and curation endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from fastapi.responses import JSONResponse
from sqlmodel import Session

from ...core import get_session
from ...models import Category, User
from ...schemas.categories import CreateCategoryRequest, UpdateCategoryRequest
from ...services import categories as category_service
from ...services.categories import category_to_dict
from ...services.results import AlreadyDeleted, Conflict, NeverDeleted, NotFound, Success
from ..deps import require_admin

router = APIRouter(tags=["categories"])


def _conflict_response(conflict: Conflict[Category]) -> JSONResponse:
    return JSONResponse(
        {
            "detail": "A category with this slug already exists",
            "conflicting": category_to_dict(conflict.conflicting),
        },
        status_code=status.HTTP_409_CONFLICT,
    )


@router.get("/api/category/{category_id}", name="get_category")
def get_category(category_id: int, session: Session = Depends(get_session)):
    """Get a category by id, including deleted categories."""

    category = category_service.get_category(session, category_id)
    if not category:
        raise HTTPException(404, "Category Not Found")
    return category_to_dict(category)


@router.get("/api/leaderboard/{leaderboard_id}/category")
def get_category_by_slug(
    leaderboard_id: int,
    slug: str = Query(..., min_length=1),
    session: Session = Depends(get_session),
):
    """Get a live category of a leaderboard by its slug."""

    category = category_service.get_category_by_slug(session, leaderboard_id, slug)
    if not category:
        raise HTTPException(404, "Category Not Found")
    return category_to_dict(category)


@router.post(
    "/leaderboard/{leaderboard_id}/categories/create",
    status_code=status.HTTP_201_CREATED,
)
def create_category(
    leaderboard_id: int,
    body: CreateCategoryRequest,
    request: Request,
    admin: User = Depends(require_admin),
    session: Session = Depends(get_session),
):
    """Create a category on a leaderboard. Administrators only."""

    result = category_service.create_category(session, leaderboard_id, body)
    if isinstance(result, Category):
        return JSONResponse(
            category_to_dict(result),
            status_code=status.HTTP_201_CREATED,
            headers={"Location": str(request.url_for("get_category", category_id=result.id))},
        )
    if isinstance(result, Conflict):
        return _conflict_response(result)
    raise HTTPException(404, result.title)


@router.patch("/category/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_category(
    category_id: int,
    body: UpdateCategoryRequest,
    admin: User = Depends(require_admin),
    session: Session = Depends(get_session),
):
    """Update a category's name, slug, info or sort direction. Administrators only."""

    result = category_service.update_category(session, category_id, body)
    if isinstance(result, Success):
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    if isinstance(result, Conflict):
        return _conflict_response(result)
    raise HTTPException(404, result.title)


@router.delete("/category/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    admin: User = Depends(require_admin),
    session: Session = Depends(get_session),
):
    """Soft-delete a category. Administrators only."""

    result = category_service.delete_category(session, category_id)
    if isinstance(result, Success):
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    if isinstance(result, AlreadyDeleted):
        raise HTTPException(404, "Category Is Already Deleted")
    raise HTTPException(404, result.title)


@router.put("/category/{category_id}/restore")
def restore_category(
    category_id: int,
    admin: User = Depends(require_admin),
    session: Session = Depends(get_session),
):
    """Undo a category's soft deletion. Administrators only."""

    result = category_service.restore_category(session, category_id)
    if isinstance(result, Category):
        return category_to_dict(result)
    if isinstance(result, Conflict):
        return _conflict_response(result)
    if isinstance(result, NeverDeleted):
        raise HTTPException(404, "Category Was Not Deleted")
    if isinstance(result, NotFound):
        raise HTTPException(404, result.title)
    raise TypeError(f"Unhandled restore result: {result!r}")


__all__ = ["router"]
