"""API assembly helpers."""

from __future__ import annotations

from fastapi import FastAPI

from .errors import register_exception_handlers
from .routers import ALL_ROUTERS


def register_routes(app: FastAPI) -> None:
    """Attach all application routers and error handlers to the given app."""

    register_exception_handlers(app)
    for router in ALL_ROUTERS:
        app.include_router(router)


__all__ = ["register_routes"]
