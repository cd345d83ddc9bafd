# src/common/exceptions.py
"""
Доменные исключения.
HTTP-слой переводит их в ответы с соответствующим статусом.
"""

from __future__ import annotations


class AppError(Exception):
    """Базовая ошибка приложения."""

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(AppError):
    """Некорректный запрос."""
    status_code = 400
    error = "Bad Request"


class ConflictError(BadRequestError):
    """Нарушение уникальности (email, номер лицензии, код перевозки)."""
    pass


class NotFoundError(AppError):
    """Сущность не найдена."""
    status_code = 404
    error = "Not Found"

    @classmethod
    def for_entity(cls, entity: str, entity_id: object) -> "NotFoundError":
        """Формирует стандартное сообщение '<Entity> with id <id> not found'."""
        return cls(f"{entity} with id {entity_id} not found")


class AuthenticationError(AppError):
    """Отсутствует или неверен токен доступа."""
    status_code = 401
    error = "Unauthorized"
