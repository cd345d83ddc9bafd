# tests/conftest.py
"""
Общие фикстуры и настройки для тестов.
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

import pytest

# Устанавливаем переменные окружения перед импортом модулей
os.environ.setdefault("API_SECRET_TOKEN", "test-api-token")
os.environ.setdefault("SOCKET_AUTH_TOKEN", "test-socket-token")
os.environ.setdefault("DB_PASSWORD", "test_password")
os.environ.setdefault("REDIS_PASSWORD", "")

API_TOKEN = os.environ["API_SECRET_TOKEN"]
SOCKET_TOKEN = os.environ["SOCKET_AUTH_TOKEN"]


# =============================================================================
# ФИКСТУРЫ КОНФИГУРАЦИИ
# =============================================================================

@pytest.fixture(scope="session")
def project_root() -> Path:
    """Корневая директория проекта."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def config_path(project_root: Path) -> Path:
    """Путь к файлу конфигурации."""
    return project_root / "config" / "config.json"


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Заголовки авторизованного запроса с пользователем."""
    return {"Authorization": f"Bearer {API_TOKEN}", "x-user-id": "user-1"}


# =============================================================================
# ФИКСТУРЫ ИНФРАСТРУКТУРЫ (МОКИ)
# =============================================================================

@pytest.fixture
def mock_conn() -> MagicMock:
    """Мок соединения asyncpg."""
    conn = MagicMock()
    conn.fetchrow = AsyncMock(return_value=None)
    conn.fetch = AsyncMock(return_value=[])
    conn.fetchval = AsyncMock(return_value=None)
    conn.execute = AsyncMock(return_value="UPDATE 0")
    return conn


@pytest.fixture
def mock_db(mock_conn: MagicMock) -> MagicMock:
    """Мок DatabaseManager: acquire() отдаёт mock_conn."""

    @asynccontextmanager
    async def acquire():
        yield mock_conn

    db = MagicMock()
    db.acquire = acquire
    db.health_check = AsyncMock(return_value=True)
    return db


@pytest.fixture
def mock_redis() -> MagicMock:
    """Мок RedisClient."""
    redis = MagicMock()
    redis.publish_json = AsyncMock(return_value=1)
    redis.incr_window = AsyncMock(return_value=1)
    redis.health_check = AsyncMock(return_value=True)
    return redis


@pytest.fixture
def mock_notifications() -> MagicMock:
    """Мок NotificationService."""
    notifications = MagicMock()
    notifications.notify = AsyncMock(return_value=True)
    return notifications


# =============================================================================
# ФИКСТУРЫ ДАННЫХ (строки БД)
# =============================================================================

def _now() -> datetime:
    return datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def client_row() -> dict[str, Any]:
    return {
        "id": uuid4(),
        "name": "Empresa Teste",
        "email": "contato@empresa.com",
        "phone": "+5511999999999",
        "address": "Rua A, 10, Centro, São Paulo, SP, 01000-000",
        "client_type": "COMPANY",
        "cpf": None,
        "cnpj": "12345678000199",
        "business_name": "Empresa Teste LTDA",
        "state_registration": None,
        "website": None,
        "notes": None,
        "created_by": "user-1",
        "updated_by": None,
        "removed_by": None,
        "removed_at": None,
        "created_at": _now(),
        "updated_at": _now(),
    }


@pytest.fixture
def driver_row() -> dict[str, Any]:
    return {
        "id": uuid4(),
        "name": "João Silva",
        "email": "joao@example.com",
        "phone": "+5511988887777",
        "license_number": "CNH-123456",
        "approval_status": "PENDING",
        "documents": None,
        "created_by": "user-1",
        "updated_by": None,
        "removed_by": None,
        "removed_at": None,
        "created_at": _now(),
        "updated_at": _now(),
    }


def make_vehicle_row(driver_id: UUID | None = None, **overrides: Any) -> dict[str, Any]:
    row = {
        "id": uuid4(),
        "plate": "ABC1D23",
        "brand": "Volvo",
        "model": "FH 540",
        "year": 2022,
        "capacity": 25000,
        "driver_id": driver_id,
        "created_at": _now(),
        "updated_at": _now(),
    }
    row.update(overrides)
    return row


@pytest.fixture
def vehicle_row() -> dict[str, Any]:
    return make_vehicle_row()


@pytest.fixture
def vehicle_row_factory():
    """Фабрика строк vehicles (driver_id и любые поля переопределяются)."""
    return make_vehicle_row


@pytest.fixture
def transport_row() -> dict[str, Any]:
    return {
        "id": uuid4(),
        "code": "TR-0001",
        "type": "FREIGHT",
        "status": "SCHEDULED",
        "pickup_address": "Av. Paulista, 1000, São Paulo",
        "delivery_address": "Rua XV de Novembro, 50, Curitiba",
        "pickup_date": None,
        "delivery_date": None,
        "driver_id": None,
        "vehicle_id": None,
        "cargo_details": "Paletes",
        "created_at": _now(),
        "updated_at": _now(),
    }


@pytest.fixture
def user_row() -> dict[str, Any]:
    return {
        "id": uuid4(),
        "name": "Admin",
        "email": "admin@example.com",
        "phone": None,
        "allowed_toasts": ["transport"],
        "is_blocked": False,
        "block_reason": None,
        "is_banned": False,
        "ban_reason": None,
        "created_at": _now(),
        "updated_at": _now(),
    }
