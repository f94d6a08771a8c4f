"""Application settings and environment helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List

from dotenv import load_dotenv

load_dotenv(override=False)


def _require_env(name: str) -> str:
    """Return a required environment variable or raise an error."""

    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


# Application security -------------------------------------------------------
SECRET_KEY = _require_env("SECRET_KEY")
JWT_ALGORITHM = "HS256"
JWT_ISSUER = os.getenv("JWT_ISSUER", "leaderboard-api")
JWT_EXPIRES_MINUTES = _env_int("JWT_EXPIRES_MINUTES", 60 * 24)

ADMIN_EMAILS = _unique(
    [email.lower() for email in _split_csv(os.getenv("ADMIN_EMAILS"))]
)

# FRONTEND_ORIGIN can contain a comma-separated list for multi-domain deploys.
_frontend_origins = _split_csv(os.getenv("FRONTEND_ORIGIN"))
_additional_origins = _split_csv(os.getenv("ADDITIONAL_ALLOWED_ORIGINS"))

_local_dev_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

ALLOWED_CORS_ORIGINS = _unique(
    [
        *_frontend_origins,
        *_additional_origins,
        *_local_dev_origins,
    ]
)

# Links embedded in outgoing emails point at the website, not the API.
WEBSITE_URL = os.getenv("WEBSITE_URL") or (
    _frontend_origins[0] if _frontend_origins else "http://localhost:5173"
)


# Persistence ----------------------------------------------------------------
_PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_DB_PATH = _PROJECT_ROOT / "data" / "app.db"
DATABASE_URL = os.getenv("DATABASE_URL") or f"sqlite:///{DEFAULT_DB_PATH}"
DB_RESET = _env_bool("DB_RESET", False)


# Runtime behaviour ----------------------------------------------------------
PAGE_LIMIT_DEFAULT = _env_int("PAGE_LIMIT_DEFAULT", 64)
PAGE_LIMIT_MAX = _env_int("PAGE_LIMIT_MAX", 1024)

CONFIRMATION_TTL_MINUTES = _env_int("CONFIRMATION_TTL_MINUTES", 60)
RECOVERY_TTL_MINUTES = _env_int("RECOVERY_TTL_MINUTES", 60)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


# Email delivery -------------------------------------------------------------
EMAIL_BACKEND = os.getenv("EMAIL_BACKEND", "log").strip().lower()
EMAIL_FROM = os.getenv("EMAIL_FROM", "noreply@localhost")
SMTP_HOST = os.getenv("SMTP_HOST", "localhost")
SMTP_PORT = _env_int("SMTP_PORT", 587)
SMTP_USERNAME = os.getenv("SMTP_USERNAME") or None
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD") or None
SMTP_STARTTLS = _env_bool("SMTP_STARTTLS", True)


__all__ = [
    "ADMIN_EMAILS",
    "ALLOWED_CORS_ORIGINS",
    "CONFIRMATION_TTL_MINUTES",
    "DATABASE_URL",
    "DB_RESET",
    "DEFAULT_DB_PATH",
    "EMAIL_BACKEND",
    "EMAIL_FROM",
    "JWT_ALGORITHM",
    "JWT_EXPIRES_MINUTES",
    "JWT_ISSUER",
    "LOG_LEVEL",
    "PAGE_LIMIT_DEFAULT",
    "PAGE_LIMIT_MAX",
    "RECOVERY_TTL_MINUTES",
    "SECRET_KEY",
    "SMTP_HOST",
    "SMTP_PASSWORD",
    "SMTP_PORT",
    "SMTP_STARTTLS",
    "SMTP_USERNAME",
    "WEBSITE_URL",
]
