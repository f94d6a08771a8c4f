"""Request contracts for registration, login and account recovery."""

from __future__ import annotations

import re
from typing import Any

from pydantic import EmailStr, Field, field_validator

from .base import RequestModel

USERNAME_PATTERN = r"^[a-zA-Z0-9]([-_']?[a-zA-Z0-9])+$"

_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_DIGIT = re.compile(r"[0-9]")


def check_password_strength(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    if not 8 <= len(value) <= 80:
        raise ValueError("Password must be between 8 and 80 characters")
    if not (_UPPER.search(value) and _LOWER.search(value) and _DIGIT.search(value)):
        raise ValueError(
            "Password must contain an uppercase letter, a lowercase letter and a digit"
        )
    return value


class RegisterRequest(RequestModel):
    username: str = Field(min_length=2, max_length=25, pattern=USERNAME_PATTERN)
    email: EmailStr
    password: str

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: Any) -> Any:
        return check_password_strength(value)


class LoginRequest(RequestModel):
    email: EmailStr
    password: str = Field(min_length=1)


class RecoverAccountRequest(RequestModel):
    username: str = Field(min_length=1)
    email: EmailStr


class ChangePasswordRequest(RequestModel):
    password: str

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: Any) -> Any:
        return check_password_strength(value)


__all__ = [
    "ChangePasswordRequest",
    "LoginRequest",
    "RecoverAccountRequest",
    "RegisterRequest",
    "USERNAME_PATTERN",
    "check_password_strength",
]
