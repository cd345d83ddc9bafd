# src/services/gateway/errors.py
"""
Перевод исключений в HTTP ответы {"statusCode", "message", "error"}.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.common.exceptions import AppError
from src.common.logger import log_debug, log_warning
from src.core.geo.errors import RoutingError
from src.shared.models.common import ErrorResponse

# Части loc, которые не несут информации для клиента
_LOC_SOURCES = {"body", "query", "path", "header", "cookie"}


def error_response(status_code: int, message: str | list[str], error: str) -> JSONResponse:
    content = ErrorResponse(status_code=status_code, message=message, error=error).to_content()
    return JSONResponse(status_code=status_code, content=content)


def format_validation_errors(errors: list[dict[str, Any]]) -> list[str]:
    """[{'loc': ('body', 'originAddress'), 'msg': 'Field required'}] -> ['originAddress: Field required']"""
    messages = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in _LOC_SOURCES]
        msg = err.get("msg", "Invalid value")
        messages.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return messages


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        await log_warning(f"{request.method} {request.url.path}: {exc.message}")
    else:
        await log_debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return error_response(exc.status_code, exc.message, exc.error)


async def routing_error_handler(request: Request, exc: RoutingError) -> JSONResponse:
    await log_warning(f"Ошибка расчёта маршрута: {exc.message}")
    return error_response(status.HTTP_400_BAD_REQUEST, exc.message, "Bad Request")


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = format_validation_errors(list(exc.errors()))
    await log_debug(f"{request.method} {request.url.path}: невалидный запрос {messages}")
    return error_response(status.HTTP_400_BAD_REQUEST, messages, "Bad Request")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RoutingError, routing_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
