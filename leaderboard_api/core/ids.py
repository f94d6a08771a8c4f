"""URL-safe encoding of UUID identifiers.

Identifiers leave the API as the unpadded URL-safe base64 form of the UUID's
16 bytes, which is always 22 characters long.
"""

from __future__ import annotations

import base64
import binascii
import re
import uuid
from typing import Optional

_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9_-]{22}$")


def encode_id(value: uuid.UUID) -> str:
    """Return the 22-character URL-safe token for ``value``."""

    return base64.urlsafe_b64encode(value.bytes).decode("ascii").rstrip("=")


def decode_id(token: str) -> Optional[uuid.UUID]:
    """Return the UUID encoded by ``token`` or ``None`` if it is not a token."""

    if not token or not _TOKEN_PATTERN.match(token):
        return None
    try:
        raw = base64.urlsafe_b64decode(token + "==")
    except (binascii.Error, ValueError):
        return None
    if len(raw) != 16:
        return None
    return uuid.UUID(bytes=raw)


__all__ = ["decode_id", "encode_id"]
