# src/services/notifications/dependencies.py
"""
Dependency Injection для уведомлений.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from src.common.logger import log_info
from src.services.notifications.connection_manager import ConnectionManager, manager

if TYPE_CHECKING:
    from src.infra.redis_client import RedisClient
    from src.services.notifications.redis_subscriber import RedisSubscriber
    from src.services.notifications.service import NotificationService


# Синглтоны
_notification_service: "NotificationService | None" = None
_subscriber: "RedisSubscriber | None" = None


async def forward_notification(channel: str, data: Any) -> None:
    """Сообщение из Redis -> всем подключённым сокетам."""
    await manager.broadcast_all({"event": "notification", "payload": data})


async def init_notifications(redis: "RedisClient", channel: str) -> None:
    """Инициализировать публикацию и подписчика при старте приложения."""
    global _notification_service, _subscriber

    from src.services.notifications.redis_subscriber import RedisSubscriber
    from src.services.notifications.service import NotificationService

    _notification_service = NotificationService(redis, channel)
    _subscriber = RedisSubscriber(redis, forward_notification, channels=[channel])
    await _subscriber.start()

    await log_info(f"Уведомления инициализированы (канал {channel})")


def get_notification_service() -> "NotificationService":
    """Получить сервис уведомлений."""
    if _notification_service is None:
        raise RuntimeError("NotificationService не инициализирован. Вызовите init_notifications()")
    return _notification_service


def get_connection_manager() -> ConnectionManager:
    return manager


async def close_notifications() -> None:
    """Остановить подписчика и закрыть сокеты."""
    global _notification_service, _subscriber
    if _subscriber:
        await _subscriber.stop()
        _subscriber = None
    await manager.close_all()
    _notification_service = None
