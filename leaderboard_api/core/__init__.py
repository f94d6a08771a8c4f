"""Core configuration and infrastructure helpers."""

from .config import (
    ADMIN_EMAILS,
    ALLOWED_CORS_ORIGINS,
    CONFIRMATION_TTL_MINUTES,
    DB_RESET,
    PAGE_LIMIT_DEFAULT,
    PAGE_LIMIT_MAX,
    RECOVERY_TTL_MINUTES,
    WEBSITE_URL,
)
from .database import engine, get_session
from .durations import format_duration, parse_duration
from .ids import decode_id, encode_id
from .logging import configure_logging
from .time import as_utc, isoformat_utc, utcnow

__all__ = [
    "ADMIN_EMAILS",
    "ALLOWED_CORS_ORIGINS",
    "CONFIRMATION_TTL_MINUTES",
    "DB_RESET",
    "PAGE_LIMIT_DEFAULT",
    "PAGE_LIMIT_MAX",
    "RECOVERY_TTL_MINUTES",
    "WEBSITE_URL",
    "as_utc",
    "configure_logging",
    "decode_id",
    "encode_id",
    "engine",
    "format_duration",
    "get_session",
    "isoformat_utc",
    "parse_duration",
    "utcnow",
]
