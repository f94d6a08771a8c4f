"""Database models for one-time account links sent by email."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from ..core.time import utcnow


class AccountConfirmation(SQLModel, table=True):
    """Confirmation link issued to a freshly registered user."""

    __tablename__ = "account_confirmation"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime
    used_at: Optional[datetime] = None


class AccountRecovery(SQLModel, table=True):
    """Password reset link requested by a user."""

    __tablename__ = "account_recovery"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime
    used_at: Optional[datetime] = None


__all__ = ["AccountConfirmation", "AccountRecovery"]
