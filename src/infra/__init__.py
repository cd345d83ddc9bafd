# src/infra/__init__.py
"""
Инфраструктурный слой.
Работа с внешними сервисами: PostgreSQL, Redis.
"""

from src.infra.database import DatabaseManager, get_db, init_db, close_db
from src.infra.redis_client import RedisClient, get_redis, init_redis, close_redis

__all__ = [
    "DatabaseManager",
    "get_db",
    "init_db",
    "close_db",
    "RedisClient",
    "get_redis",
    "init_redis",
    "close_redis",
]
