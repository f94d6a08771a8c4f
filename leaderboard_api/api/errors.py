"""Application-wide exception handlers."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    """Separate unparseable JSON (400) from schema violations (422)."""

    if any(error.get("type") == "json_invalid" for error in exc.errors()):
        logger.info(f"Malformed JSON body on {request.method} {request.url.path}")
        return JSONResponse({"detail": "Malformed JSON body"}, status_code=400)
    return await request_validation_exception_handler(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _validation_error_handler)


__all__ = ["register_exception_handlers"]
