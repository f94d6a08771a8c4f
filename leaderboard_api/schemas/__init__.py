"""Request payload contracts."""

from .categories import CreateCategoryRequest, CreateLeaderboardRequest, UpdateCategoryRequest
from .runs import CreateScoredRunRequest, CreateTimedRunRequest, Page, RunSort
from .users import ChangePasswordRequest, LoginRequest, RecoverAccountRequest, RegisterRequest

__all__ = [
    "ChangePasswordRequest",
    "CreateCategoryRequest",
    "CreateLeaderboardRequest",
    "CreateScoredRunRequest",
    "CreateTimedRunRequest",
    "LoginRequest",
    "Page",
    "RecoverAccountRequest",
    "RegisterRequest",
    "RunSort",
    "UpdateCategoryRequest",
]
