"""Request contracts for run submission and listing."""

from __future__ import annotations

import re
from datetime import date
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from ..core.config import PAGE_LIMIT_DEFAULT, PAGE_LIMIT_MAX
from ..core.durations import parse_duration
from .base import RequestModel

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MAX_VALUE = 2 ** 63 - 1


class _CreateRunRequestBase(RequestModel):
    info: str = ""
    played_on: date

    @field_validator("info", mode="before")
    @classmethod
    def _default_info(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("played_on", mode="before")
    @classmethod
    def _parse_played_on(cls, value: Any) -> date:
        if not isinstance(value, str) or not _ISO_DATE.match(value):
            raise ValueError("playedOn must be a date in YYYY-MM-DD form")
        return date.fromisoformat(value)


class CreateTimedRunRequest(_CreateRunRequestBase):
    """Submission for a category whose runs are timed."""

    run_type: Literal["Time"]
    time: int = Field(description="Elapsed time as H:mm:ss.fffffffff")

    @field_validator("time", mode="before")
    @classmethod
    def _parse_time(cls, value: Any) -> int:
        if not isinstance(value, str):
            raise ValueError("time must be a duration string")
        nanoseconds = parse_duration(value)
        if nanoseconds <= 0:
            raise ValueError("time must be greater than zero")
        if nanoseconds > _MAX_VALUE:
            raise ValueError("time is too large")
        return nanoseconds


class CreateScoredRunRequest(_CreateRunRequestBase):
    """Submission for a category whose runs are scored."""

    run_type: Literal["Score"]
    score: int = Field(ge=0, le=_MAX_VALUE, strict=True)


CreateRunRequest = Annotated[
    Union[CreateTimedRunRequest, CreateScoredRunRequest],
    Field(discriminator="run_type"),
]

create_run_request_adapter: TypeAdapter[
    Union[CreateTimedRunRequest, CreateScoredRunRequest]
] = TypeAdapter(CreateRunRequest)


class RunSort(str, Enum):
    """Orderings offered by the category run listing."""

    PLAYED_ON = "playedOn"
    RANK = "rank"


class Page(BaseModel):
    """Window over an ordered result set."""

    limit: int = Field(default=PAGE_LIMIT_DEFAULT, ge=0)
    offset: int = Field(default=0, ge=0)

    @property
    def effective_limit(self) -> int:
        return min(self.limit, PAGE_LIMIT_MAX)


__all__ = [
    "CreateRunRequest",
    "CreateScoredRunRequest",
    "CreateTimedRunRequest",
    "Page",
    "RunSort",
    "create_run_request_adapter",
]
