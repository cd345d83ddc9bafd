# src/shared/models/common.py
"""
Общие модели для всех сервисов.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Базовая модель API: поля в snake_case внутри, camelCase в JSON.
    Принимает оба варианта имён на входе.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class RequestModel(CamelModel):
    """Тело запроса: неизвестные поля запрещены (ответ 400)."""

    class Config:
        extra = "forbid"


class MessageResponse(BaseModel):
    """Ответ с текстовым сообщением (удаление и т.п.)."""
    message: str


class ErrorResponse(BaseModel):
    """Стандартный ответ с ошибкой."""

    status_code: int = Field(..., serialization_alias="statusCode")
    message: str | list[str]
    error: str

    def to_content(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class HealthStatus(BaseModel):
    """Статус здоровья сервиса."""

    service: str
    status: str = "healthy"  # healthy, degraded
    version: str | None = None
    dependencies: dict[str, str] = Field(default_factory=dict)
    # dependencies: {"postgres": "healthy", "redis": "unhealthy"}
