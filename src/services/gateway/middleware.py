# src/services/gateway/middleware.py
"""
HTTP middleware шлюза.

- bearer_auth_middleware: проверка API_SECRET_TOKEN
- throttle_middleware: фиксированное окно запросов на IP (счётчик в Redis)
"""

from __future__ import annotations

from typing import Awaitable, Callable

from fastapi import Request, Response, status

from src.common.exceptions import AuthenticationError
from src.common.logger import log_debug, log_warning
from src.config import settings
from src.infra.redis_client import get_redis
from src.services.gateway.errors import error_response
from src.services.gateway.security import is_path_excluded, verify_bearer_token

CallNext = Callable[[Request], Awaitable[Response]]

THROTTLE_MESSAGE = "ThrottlerException: Too Many Requests"


def client_ip(request: Request) -> str:
    """IP клиента: первый адрес X-Forwarded-For или адрес соединения."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def bearer_auth_middleware(request: Request, call_next: CallNext) -> Response:
    """401 для всех маршрутов, кроме исключённых префиксов и preflight."""
    if request.method == "OPTIONS" or is_path_excluded(request.url.path, settings.auth.AUTH_EXCLUDED_PREFIXES):
        return await call_next(request)

    try:
        verify_bearer_token(request.headers.get("authorization"), settings.auth.API_SECRET_TOKEN)
    except AuthenticationError as e:
        await log_debug(f"{request.method} {request.url.path}: {e.message} ({client_ip(request)})")
        return error_response(e.status_code, e.message, e.error)

    return await call_next(request)


async def throttle_middleware(request: Request, call_next: CallNext) -> Response:
    """
    Не более THROTTLE_LIMIT запросов за THROTTLE_TTL_SECONDS с одного IP.
    Если Redis недоступен, запрос пропускается.
    """
    throttle = settings.throttle
    if not throttle.THROTTLE_ENABLED or request.method == "OPTIONS":
        return await call_next(request)

    ip = client_ip(request)
    try:
        count = await get_redis().incr_window(f"throttle:{ip}", throttle.THROTTLE_TTL_SECONDS)
    except Exception as e:
        await log_warning(f"Throttling отключён для запроса: Redis недоступен ({e})")
        return await call_next(request)

    if count > throttle.THROTTLE_LIMIT:
        await log_warning(f"Превышен лимит запросов: {ip} ({count}/{throttle.THROTTLE_LIMIT})")
        response = error_response(status.HTTP_429_TOO_MANY_REQUESTS, THROTTLE_MESSAGE, "Too Many Requests")
        response.headers["Retry-After"] = str(throttle.THROTTLE_TTL_SECONDS)
        return response

    return await call_next(request)
