"""
Application error taxonomy and the centralized error responder.

Services raise the typed errors below; the handlers registered by
`register_exception_handlers` turn every failure into the same body shape:

    {"error": {"message": ..., "status": ...}}
"""

import logging
import traceback
from typing import Any, List, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error carrying an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: Union[str, List[str]] = "Internal Server Error"):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Malformed or empty input."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: Union[str, List[str]] = "Bad Request"):
        super().__init__(message)


class UnauthorizedError(AppError):
    """Authentication or authorization guard failed."""
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(AppError):
    """Referenced entity does not exist."""
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)


class DuplicateError(AppError):
    """Uniqueness violated (natural key, email, job application)."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Duplicate"):
        super().__init__(message)


def error_body(message: Any, status_code: int) -> dict:
    return {"error": {"message": message, "status": status_code}}


def _format_validation_error(err: dict) -> str:
    # loc looks like ("body", "numEmployees") or ("query", "minSalary")
    location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
    return f"{location}: {err.get('msg')}" if location else err.get("msg", "invalid input")


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        logger.debug(f"Unauthorized {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.status_code))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [_format_validation_error(err) for err in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(messages, status.HTTP_400_BAD_REQUEST),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail, exc.status_code),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    stack = traceback.format_exception(type(exc), exc, exc.__traceback__)
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}\n{''.join(stack)}")

    body = error_body("Internal Server Error", status.HTTP_500_INTERNAL_SERVER_ERROR)
    if settings.is_development:
        body["error"]["message"] = str(exc) or "Internal Server Error"
        body["error"]["stack"] = stack
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error responder to the application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
