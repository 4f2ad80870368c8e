"""Domain errors and the centralized handlers that render them.

Every failure reaches the client as ``{"message": str, "stack": str | None}``.
The stack is only filled in outside production.
"""

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings

logger = logging.getLogger(__name__)

_REQUEST_SECTIONS = ("body", "path", "query", "header", "cookie")


class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing. Never rendered."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AppError(Exception):
    """Base for domain failures carrying a client-facing message and HTTP status."""

    status_code: int = 400
    # Status used instead of status_code when LEGACY_ERROR_STATUS is enabled.
    legacy_status_code: int | None = None
    headers: dict[str, str] | None = None

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def resolve_status(self, settings: Settings) -> int:
        if settings.LEGACY_ERROR_STATUS and self.legacy_status_code is not None:
            return self.legacy_status_code
        return self.status_code


class InvalidCredentials(AppError):
    """Login failed. Same message and status whether the account or the password was wrong."""

    status_code = 401
    legacy_status_code = 200

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class Unauthorized(AppError):
    status_code = 401
    headers = {"WWW-Authenticate": "Bearer"}


class Forbidden(AppError):
    status_code = 403


class NotFound(AppError):
    status_code = 404


class ValidationFailed(AppError):
    status_code = 400


class DuplicateEntry(AppError):
    """Persistence rejected a write (e.g. email already registered)."""

    status_code = 409
    legacy_status_code = 200

    def __init__(self, message: str = "Duplicate entry") -> None:
        super().__init__(message)


def _format_stack(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def _render(
    request: Request,
    exc: BaseException,
    message: str,
    status_code: int,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    settings: Settings = request.app.state.settings
    stack = None if settings.APP_ENV == "prod" else _format_stack(exc)
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "stack": stack},
        headers=headers,
    )


def _validation_messages(exc: RequestValidationError) -> list[str]:
    """Collect one message per violated rule, preferring the validator's own text."""
    messages: list[str] = []
    for error in exc.errors():
        ctx_error = (error.get("ctx") or {}).get("error")
        if isinstance(ctx_error, Exception):
            text = str(ctx_error)
        else:
            parts = list(error.get("loc", ()))
            if parts and parts[0] in _REQUEST_SECTIONS:
                parts = parts[1:]
            loc = ".".join(str(part) for part in parts)
            text = f"{loc}: {error.get('msg')}" if loc else str(error.get("msg"))
        if text not in messages:
            messages.append(text)
    return messages


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    settings: Settings = request.app.state.settings
    return _render(request, exc, exc.message, exc.resolve_status(settings), exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    failure = ValidationFailed(", ".join(_validation_messages(exc)))
    return await app_error_handler(request, failure)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        # Unmatched routes; handlers raise NotFound themselves.
        return await app_error_handler(request, NotFound(f"Not Found - {request.url.path}"))
    return _render(request, exc, str(exc.detail), exc.status_code, exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error",
        extra={"method": request.method, "path": request.url.path},
    )
    return _render(request, exc, "Internal Server Error", 500)


def register_exception_handlers(app: FastAPI) -> None:
    """Route every failure through the uniform renderer."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
