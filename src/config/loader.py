# src/config/loader.py
"""
Загрузчик конфигурации проекта.
Единственный источник истины: config/config.json.
Секретные данные переопределяются из переменных окружения.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


# =============================================================================
# ОПРЕДЕЛЕНИЕ ПУТЕЙ
# =============================================================================

def get_project_root() -> Path:
    """Возвращает корневую директорию проекта."""
    return Path(__file__).parent.parent.parent


def get_config_path() -> Path:
    """Возвращает путь к файлу конфигурации."""
    return get_project_root() / "config" / "config.json"


def load_config_json() -> dict[str, Any]:
    """Загружает config.json и возвращает словарь."""
    config_path = get_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Файл конфигурации не найден: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        return json.load(f)


def _env_list(name: str, default: list[str]) -> list[str]:
    """Читает список из переменной окружения (значения через запятую)."""
    raw = os.getenv(name)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


# =============================================================================
# PYDANTIC МОДЕЛИ КОНФИГУРАЦИИ
# =============================================================================

class SystemSettings(BaseModel):
    """Системные настройки."""
    PROJECT_NAME: str = "logistics_backend"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"


class DeploymentSettings(BaseModel):
    """Параметры запуска HTTP API."""
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 6006
    API_PREFIX: str = ""


class LoggingSettings(BaseModel):
    """Настройки логирования."""
    LOG_LEVEL: str = "DEBUG"
    LOG_TO_FILE: bool = True
    LOG_FILE_PATH: str = "logs/app.log"
    LOG_FORMAT: str = "colored"
    LOG_MAX_BYTES: int = 10485760
    LOG_BACKUP_COUNT: int = 5


class AuthSettings(BaseModel):
    """Токены доступа к API и к сокету уведомлений."""
    API_SECRET_TOKEN: str = ""
    SOCKET_AUTH_TOKEN: str = ""
    AUTH_EXCLUDED_PREFIXES: list[str] = Field(
        default_factory=lambda: ["/health", "/auth", "/server", "/docs", "/redoc", "/openapi.json", "/ws"]
    )

    @field_validator("API_SECRET_TOKEN", "SOCKET_AUTH_TOKEN", mode="before")
    @classmethod
    def get_from_env(cls, v: str, info) -> str:
        """Получает токен из переменных окружения, если не задан."""
        if not v:
            return os.getenv(info.field_name, "")
        return v


class DatabaseSettings(BaseModel):
    """Настройки PostgreSQL."""
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "logistics"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_MIN_POOL_SIZE: int = 5
    DB_MAX_POOL_SIZE: int = 20
    DB_COMMAND_TIMEOUT: int = 60
    DB_RETRY_ATTEMPTS: int = 3
    DB_RETRY_DELAY: float = 1.0

    @field_validator("DB_PASSWORD", mode="before")
    @classmethod
    def get_from_env(cls, v: str) -> str:
        """Получает пароль из переменных окружения."""
        if not v:
            return os.getenv("DB_PASSWORD", "")
        return v

    @property
    def dsn(self) -> str:
        """Возвращает DSN для подключения к PostgreSQL."""
        return (
            f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


class RedisSettings(BaseModel):
    """Настройки Redis."""
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: str = ""
    REDIS_NAMESPACE: str = "logistics"
    REDIS_MAX_CONNECTIONS: int = 50

    @field_validator("REDIS_PASSWORD", mode="before")
    @classmethod
    def get_from_env(cls, v: str) -> str:
        """Получает пароль из переменных окружения."""
        if not v:
            return os.getenv("REDIS_PASSWORD", "")
        return v

    @property
    def url(self) -> str:
        """Возвращает URL для подключения к Redis."""
        auth = f":{self.REDIS_PASSWORD}@" if self.REDIS_PASSWORD else ""
        return f"redis://{auth}{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"


class RoutingSettings(BaseModel):
    """Внешние сервисы геокодирования (Nominatim) и маршрутизации (OSRM)."""
    NOMINATIM_URL: str = "https://nominatim.openstreetmap.org/search"
    OSRM_URL: str = "http://router.project-osrm.org"
    OSRM_PROFILE: str = "driving"
    GEOCODER_USER_AGENT: str = "MeuERP/1.0 (email@dominio.com)"
    ROUTING_HTTP_TIMEOUT: float = 10.0


class CorsSettings(BaseModel):
    """Настройки CORS."""
    CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["http://localhost:4200"])


class ThrottleSettings(BaseModel):
    """Ограничение частоты запросов (фиксированное окно на IP)."""
    THROTTLE_ENABLED: bool = True
    THROTTLE_LIMIT: int = 10
    THROTTLE_TTL_SECONDS: int = 60


class NotificationSettings(BaseModel):
    """Настройки рассылки уведомлений."""
    NOTIFICATIONS_CHANNEL: str = "notifications"


# =============================================================================
# ГЛАВНЫЙ КЛАСС НАСТРОЕК
# =============================================================================

class Settings(BaseSettings):
    """
    Главный класс настроек приложения.
    Агрегирует все секции конфигурации.
    """
    system: SystemSettings = Field(default_factory=SystemSettings)
    deployment: DeploymentSettings = Field(default_factory=DeploymentSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    routing: RoutingSettings = Field(default_factory=RoutingSettings)
    cors: CorsSettings = Field(default_factory=CorsSettings)
    throttle: ThrottleSettings = Field(default_factory=ThrottleSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @classmethod
    def from_config_json(cls) -> "Settings":
        """
        Создаёт объект Settings из config.json.
        Секреты переопределяются из переменных окружения.
        """
        config_data = load_config_json()

        # Фильтруем комментарии (ключи, начинающиеся с _comment_)
        filtered_data = {k: v for k, v in config_data.items() if not k.startswith("_comment_")}

        return cls(
            system=SystemSettings(
                PROJECT_NAME=filtered_data.get("PROJECT_NAME", "logistics_backend"),
                VERSION=filtered_data.get("VERSION", "1.0.0"),
                DEBUG=filtered_data.get("DEBUG", False),
                ENVIRONMENT=os.getenv("ENVIRONMENT", filtered_data.get("ENVIRONMENT", "development")),
            ),
            deployment=DeploymentSettings(
                API_HOST=os.getenv("API_HOST", filtered_data.get("API_HOST", "0.0.0.0")),
                API_PORT=int(os.getenv("PORT", filtered_data.get("API_PORT", 6006))),
                API_PREFIX=filtered_data.get("API_PREFIX", ""),
            ),
            logging=LoggingSettings(
                LOG_LEVEL=os.getenv("LOG_LEVEL", filtered_data.get("LOG_LEVEL", "DEBUG")),
                LOG_TO_FILE=filtered_data.get("LOG_TO_FILE", True),
                LOG_FILE_PATH=filtered_data.get("LOG_FILE_PATH", "logs/app.log"),
                LOG_FORMAT=filtered_data.get("LOG_FORMAT", "colored"),
                LOG_MAX_BYTES=filtered_data.get("LOG_MAX_BYTES", 10485760),
                LOG_BACKUP_COUNT=filtered_data.get("LOG_BACKUP_COUNT", 5),
            ),
            auth=AuthSettings(
                API_SECRET_TOKEN=os.getenv("API_SECRET_TOKEN", filtered_data.get("API_SECRET_TOKEN", "")),
                SOCKET_AUTH_TOKEN=os.getenv("SOCKET_AUTH_TOKEN", filtered_data.get("SOCKET_AUTH_TOKEN", "")),
                AUTH_EXCLUDED_PREFIXES=filtered_data.get(
                    "AUTH_EXCLUDED_PREFIXES",
                    ["/health", "/auth", "/server", "/docs", "/redoc", "/openapi.json", "/ws"],
                ),
            ),
            database=DatabaseSettings(
                DB_HOST=os.getenv("DB_HOST", filtered_data.get("DB_HOST", "localhost")),
                DB_PORT=int(os.getenv("DB_PORT", filtered_data.get("DB_PORT", 5432))),
                DB_NAME=os.getenv("DB_NAME", filtered_data.get("DB_NAME", "logistics")),
                DB_USER=os.getenv("DB_USER", filtered_data.get("DB_USER", "postgres")),
                DB_PASSWORD=os.getenv("DB_PASSWORD", filtered_data.get("DB_PASSWORD", "")),
                DB_MIN_POOL_SIZE=filtered_data.get("DB_MIN_POOL_SIZE", 5),
                DB_MAX_POOL_SIZE=filtered_data.get("DB_MAX_POOL_SIZE", 20),
                DB_COMMAND_TIMEOUT=filtered_data.get("DB_COMMAND_TIMEOUT", 60),
                DB_RETRY_ATTEMPTS=filtered_data.get("DB_RETRY_ATTEMPTS", 3),
                DB_RETRY_DELAY=filtered_data.get("DB_RETRY_DELAY", 1.0),
            ),
            redis=RedisSettings(
                REDIS_HOST=os.getenv("REDIS_HOST", filtered_data.get("REDIS_HOST", "localhost")),
                REDIS_PORT=int(os.getenv("REDIS_PORT", filtered_data.get("REDIS_PORT", 6379))),
                REDIS_DB=filtered_data.get("REDIS_DB", 0),
                REDIS_PASSWORD=os.getenv("REDIS_PASSWORD", filtered_data.get("REDIS_PASSWORD", "")),
                REDIS_NAMESPACE=filtered_data.get("REDIS_NAMESPACE", "logistics"),
                REDIS_MAX_CONNECTIONS=filtered_data.get("REDIS_MAX_CONNECTIONS", 50),
            ),
            routing=RoutingSettings(
                NOMINATIM_URL=os.getenv("NOMINATIM_URL", filtered_data.get("NOMINATIM_URL", "https://nominatim.openstreetmap.org/search")),
                OSRM_URL=os.getenv("OSRM_URL", filtered_data.get("OSRM_URL", "http://router.project-osrm.org")),
                OSRM_PROFILE=filtered_data.get("OSRM_PROFILE", "driving"),
                GEOCODER_USER_AGENT=filtered_data.get("GEOCODER_USER_AGENT", "MeuERP/1.0 (email@dominio.com)"),
                ROUTING_HTTP_TIMEOUT=filtered_data.get("ROUTING_HTTP_TIMEOUT", 10.0),
            ),
            cors=CorsSettings(
                CORS_ORIGINS=_env_list("CORS_ORIGINS", filtered_data.get("CORS_ORIGINS", ["http://localhost:4200"])),
            ),
            throttle=ThrottleSettings(
                THROTTLE_ENABLED=filtered_data.get("THROTTLE_ENABLED", True),
                THROTTLE_LIMIT=filtered_data.get("THROTTLE_LIMIT", 10),
                THROTTLE_TTL_SECONDS=filtered_data.get("THROTTLE_TTL_SECONDS", 60),
            ),
            notifications=NotificationSettings(
                NOTIFICATIONS_CHANNEL=filtered_data.get("NOTIFICATIONS_CHANNEL", "notifications"),
            ),
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Возвращает синглтон настроек приложения.
    Использует кэширование для производительности.
    """
    from dotenv import load_dotenv

    # Загружаем .env файл
    env_path = get_project_root() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    return Settings.from_config_json()


# Экспорт синглтона для удобного импорта
settings = get_settings()
