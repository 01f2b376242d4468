"""
Error types and the handlers that turn them into JSON responses.

Services raise the :class:`ApiError` subclasses below; the handlers
registered by :func:`register_error_handlers` translate them into a
``{"success": false, "error": "<message>"}`` body with the matching
status code.  Failures of external providers are reported by the
integration clients as :class:`IntegrationError` and re‑raised by the
services as :class:`UpstreamFailure` with a message that is safe to
show to clients.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailed(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class Conflict(ApiError):
    """The request clashes with current state (e.g. category still in use)."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN


class UpstreamFailure(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class IntegrationError(Exception):
    """Raised by integration clients when an external provider call fails."""


def error_body(message: str) -> Dict[str, Any]:
    return {"success": False, "error": message}


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field_name = ".".join(location)
    if first.get("type") == "missing":
        return f"Field '{field_name}' is required." if field_name else "Request body is required."
    if field_name:
        return f"Invalid value for '{field_name}': {first.get('msg')}"
    return str(first.get("msg"))


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(_describe_validation_error(exc)),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        headers: Optional[Dict[str, str]] = getattr(exc, "headers", None)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error"),
        )
