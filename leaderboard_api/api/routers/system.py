"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ...core import PAGE_LIMIT_DEFAULT, PAGE_LIMIT_MAX

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple readiness probe."""

    return {"ok": True}


@router.get("/healthz")
def healthz() -> JSONResponse:
    """Kubernetes-style readiness endpoint."""

    return JSONResponse({"ok": True})


@router.get("/config")
def get_config() -> Dict[str, Any]:
    """Expose paging limits to the frontend."""

    return {
        "limitDefault": PAGE_LIMIT_DEFAULT,
        "limitMax": PAGE_LIMIT_MAX,
    }


__all__ = ["router"]
