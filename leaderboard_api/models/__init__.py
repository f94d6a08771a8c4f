"""Database model exports."""

from .account import AccountConfirmation, AccountRecovery
from .leaderboard import Category, Leaderboard, RunType, SortDirection
from .run import Run
from .user import User, UserRole

__all__ = [
    "AccountConfirmation",
    "AccountRecovery",
    "Category",
    "Leaderboard",
    "Run",
    "RunType",
    "SortDirection",
    "User",
    "UserRole",
]
