"""Database model for registered users."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum

from sqlmodel import Field, SQLModel

from ..core.time import utcnow


class UserRole(str, Enum):
    REGISTERED = "Registered"
    CONFIRMED = "Confirmed"
    ADMINISTRATOR = "Administrator"
    BANNED = "Banned"


class User(SQLModel, table=True):
    """Account that can log in and submit runs."""

    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    username: str = Field(index=True, unique=True)
    email: str = Field(index=True, unique=True)
    password: str
    role: UserRole = Field(default=UserRole.REGISTERED)
    created_at: datetime = Field(default_factory=utcnow)


__all__ = ["User", "UserRole"]
