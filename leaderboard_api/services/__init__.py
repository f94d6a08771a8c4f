"""Service layer helpers."""

from .categories import category_to_dict, get_category, get_category_for_run
from .leaderboards import leaderboard_to_dict
from .runs import create_run, get_run, get_runs_for_category, run_to_view
from .users import get_user_from_token, user_to_dict

__all__ = [
    "category_to_dict",
    "create_run",
    "get_category",
    "get_category_for_run",
    "get_run",
    "get_runs_for_category",
    "get_user_from_token",
    "leaderboard_to_dict",
    "run_to_view",
    "user_to_dict",
]
