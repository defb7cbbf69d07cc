# app/core/errors.py
"""
Error types raised by the store and ticket services, and the handlers that
turn them into JSON responses of the form ``{"error": "<message>"}``.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class HelpdeskError(Exception):
    """Base exception for help desk operations."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(HelpdeskError):
    """Raised when a request body or path parameter is rejected."""

    status_code = 400


class NotFound(HelpdeskError):
    """Raised when no ticket has the requested id."""

    status_code = 404


class StoreError(HelpdeskError):
    """Raised when reading or writing the ticket collection fails."""


class StoreUnavailable(StoreError):
    """Raised when the key-value backend cannot be reached."""


def _describe(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query")]
        field = ".".join(loc)
        parts.append(f"{field}: {err['msg']}" if field else err["msg"])
    return "; ".join(parts) or "Invalid request"


async def helpdesk_error_handler(request: Request, exc: HelpdeskError) -> JSONResponse:
    if isinstance(exc, StoreError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _describe(exc)
    logger.info("%s %s rejected: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=ValidationError.status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HelpdeskError, helpdesk_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


__all__ = [
    "HelpdeskError",
    "ValidationError",
    "NotFound",
    "StoreError",
    "StoreUnavailable",
    "register_error_handlers",
]
