# src/services/gateway/security.py
"""
Проверка доступа к API.

- Bearer-токен (API_SECRET_TOKEN) для всех HTTP маршрутов, кроме исключённых префиксов
- Токен сокета уведомлений (SOCKET_AUTH_TOKEN)
- Заголовок x-user-id с идентификатором пользователя, выполняющего изменение
"""

from __future__ import annotations

import hmac
from typing import Annotated, Iterable

from fastapi import Header

from src.common.constants import USER_ID_HEADER
from src.common.exceptions import AuthenticationError, BadRequestError


def tokens_match(provided: str | None, expected: str) -> bool:
    """Сравнение за постоянное время. Пустой ожидаемый токен не совпадает ни с чем."""
    if not provided or not expected:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def extract_bearer_token(authorization: str | None) -> str | None:
    """'Bearer <token>' -> '<token>'; иначе None."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def verify_bearer_token(authorization: str | None, secret: str) -> None:
    """
    Проверяет заголовок Authorization.

    Raises:
        AuthenticationError: "No token provided." если заголовка нет,
            "Invalid token." если схема не Bearer или токен не совпал
    """
    if not authorization or not authorization.strip():
        raise AuthenticationError("No token provided.")
    if not tokens_match(extract_bearer_token(authorization), secret):
        raise AuthenticationError("Invalid token.")


def is_path_excluded(path: str, excluded_prefixes: Iterable[str]) -> bool:
    """Путь совпадает с префиксом целиком или продолжается после '/'."""
    for prefix in excluded_prefixes:
        prefix = prefix.rstrip("/")
        if path == prefix or path.startswith(prefix + "/"):
            return True
    return False


async def get_acting_user_id(
    x_user_id: Annotated[str | None, Header(alias=USER_ID_HEADER)] = None,
) -> str:
    """Идентификатор пользователя из заголовка x-user-id (обязателен для изменений)."""
    if not x_user_id or not x_user_id.strip():
        raise BadRequestError(f"User id header ({USER_ID_HEADER}) is required")
    return x_user_id.strip()
