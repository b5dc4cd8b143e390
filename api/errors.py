"""
Error taxonomy and the central error translator.

Handlers raise an :class:`AppError` subclass; the exception handlers
registered here turn it (or any framework / unexpected error) into the
JSON envelope ``{"title", "message", "stackTrace"}``.
"""

from __future__ import annotations

import logging
import traceback
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import config

logger = logging.getLogger(__name__)

ERROR_TITLES: Dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "Validation Error",
    status.HTTP_401_UNAUTHORIZED: "Unauthorized Error",
    status.HTTP_403_FORBIDDEN: "Forbidden Error",
    status.HTTP_404_NOT_FOUND: "Not Found Error",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "Server Error",
}


class AppError(Exception):
    """Base application error; subclasses pin the HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ServerError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def translate(status_code: int) -> tuple[int, str]:
    """Map a status to ``(status, title)``; unlisted codes collapse to 500."""
    if status_code in ERROR_TITLES:
        return status_code, ERROR_TITLES[status_code]
    return (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ERROR_TITLES[status.HTTP_500_INTERNAL_SERVER_ERROR],
    )


def _stack_trace(exc: BaseException) -> Optional[str]:
    if not config.debug:
        return None
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def error_response(status_code: int, message: str, exc: BaseException) -> JSONResponse:
    code, title = translate(status_code)
    body: Dict[str, Any] = {
        "title": title,
        "message": message,
        "stackTrace": _stack_trace(exc),
    }
    return JSONResponse(status_code=code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Install the translator for application, framework and unexpected errors."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
        return error_response(exc.status_code, exc.message, exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail), exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        messages = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
            for err in exc.errors()
        )
        return error_response(status.HTTP_400_BAD_REQUEST, messages or "Invalid request", exc)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "Internal Server Error", exc)
