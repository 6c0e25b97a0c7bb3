"""
Domain errors and their HTTP mapping.

Services raise the exceptions defined here; ``register_exception_handlers``
translates them into short JSON responses of the form
``{"detail": "<message>"}`` with the status code carried by the
exception class.  Store failures and unexpected exceptions become a
generic 500; the traceback is only logged server‑side.

Usage::

    from forest_fires_api.app.core.errors import register_exception_handlers
    register_exception_handlers(app)
"""

import logging
import sqlite3
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors reported to the API caller."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, hint: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint

    def to_content(self) -> Dict[str, Any]:
        content: Dict[str, Any] = {"detail": self.message}
        if self.hint:
            content["hint"] = self.hint
        return content


class BadRequestError(ApiError):
    """Malformed, missing or mistyped input, or a disallowed path shape."""

    status_code = status.HTTP_400_BAD_REQUEST


class MissingFieldError(BadRequestError):
    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required field: {field}")
        self.field = field


class InvalidTypeError(BadRequestError):
    def __init__(self, field: str, expected: str) -> None:
        super().__init__(f"Field {field} must be {expected}")
        self.field = field
        self.expected = expected


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class NoDataLoadedError(NotFoundError):
    """Raised when a lookup hits an empty store."""


class MethodNotAllowedError(ApiError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED


class ConflictError(ApiError):
    """Key collision or an attempt to change an immutable key."""

    status_code = status.HTTP_409_CONFLICT


class UpstreamFailureError(ApiError):
    status_code = status.HTTP_502_BAD_GATEWAY


def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers for domain errors and unexpected failures."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        logger.warning(
            "%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(sqlite3.Error)
    async def store_error_handler(request: Request, exc: sqlite3.Error) -> JSONResponse:
        logger.exception("Store error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Error accessing the database"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal Server Error"},
        )
