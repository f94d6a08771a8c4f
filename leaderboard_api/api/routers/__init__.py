"""Aggregate API routers."""

from fastapi import APIRouter

from .account import router as account_router
from .categories import router as categories_router
from .leaderboards import router as leaderboards_router
from .runs import router as runs_router
from .system import router as system_router
from .users import router as users_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    leaderboards_router,
    categories_router,
    runs_router,
    users_router,
    account_router,
)

__all__ = ["ALL_ROUTERS"]
