"""Result variants returned by the service layer.

Services never raise for expected domain outcomes; they return one of these
values (or the successful entity) and the routers map each variant to an
HTTP response.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class BadRole:
    """The caller's role does not allow the operation."""


@dataclass(frozen=True)
class NotFound:
    title: str = "Not Found"


@dataclass(frozen=True)
class Unprocessable:
    detail: str
    errors: Dict[str, List[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class Conflict(Generic[T]):
    conflicting: T


@dataclass(frozen=True)
class BadCredentials:
    """The bearer token or password could not be verified."""


@dataclass(frozen=True)
class UserNotFound:
    pass


@dataclass(frozen=True)
class UserBanned:
    pass


@dataclass(frozen=True)
class EmailFailed:
    pass


@dataclass(frozen=True)
class Expired:
    pass


@dataclass(frozen=True)
class AlreadyUsed:
    pass


@dataclass(frozen=True)
class AlreadyDeleted:
    pass


@dataclass(frozen=True)
class NeverDeleted:
    pass


@dataclass(frozen=True)
class Success:
    pass


@dataclass(frozen=True)
class ListResult(Generic[T]):
    """One page of items plus the size of the whole filtered set."""

    items: List[T]
    total: int


def errors_from_validation(exc: Any) -> Dict[str, List[str]]:
    """Group pydantic validation errors by dotted field location."""

    grouped: Dict[str, List[str]] = {}
    for error in exc.errors(include_url=False, include_context=False):
        location = ".".join(str(part) for part in error.get("loc", ())) or "body"
        grouped.setdefault(location, []).append(error.get("msg", "Invalid value"))
    return grouped


__all__ = [
    "AlreadyDeleted",
    "AlreadyUsed",
    "BadCredentials",
    "BadRole",
    "Conflict",
    "EmailFailed",
    "Expired",
    "ListResult",
    "NeverDeleted",
    "NotFound",
    "Success",
    "Unprocessable",
    "UserBanned",
    "UserNotFound",
    "errors_from_validation",
]
