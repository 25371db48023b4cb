"""Доменные ошибки и их отображение на HTTP-ответы.

- ValidationError    -> 400, с указанием поля
- NotFoundError      -> 404
- AuthorizationError -> 404 (не 403: не раскрываем существование чужих записей)
- всё остальное      -> 500, подробности только в логе
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DomainError(Exception):
    """Base class for errors raised by the schedule/log core."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Malformed date, bad schedule or out-of-range weekday."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND


class AuthorizationError(NotFoundError):
    """Cross-user access attempt. Reported to the client exactly like a missing record."""

    def __init__(self, message: str, public_message: str = "Not found"):
        self.public_message = public_message
        super().__init__(message)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "field": exc.field},
    )


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    if isinstance(exc, AuthorizationError):
        logger.warning(f"Отказ в доступе: {exc.message} ({request.method} {request.url.path})")
        message = exc.public_message
    else:
        message = exc.message
    return JSONResponse(status_code=exc.status_code, content={"error": message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation failed", "details": jsonable_encoder(exc.errors())},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Необработанная ошибка: {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
