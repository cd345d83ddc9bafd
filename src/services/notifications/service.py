# src/services/notifications/service.py
"""
Публикация уведомлений об изменениях в Redis.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from src.common.constants import NOTIFICATION_MESSAGE, TypeMsg
from src.common.logger import log_error, log_info

if TYPE_CHECKING:
    from src.infra.redis_client import RedisClient


class NotificationService:
    """
    Рассылка изменений подписчикам.

    Ошибка публикации только логируется: изменение данных
    не должно откатываться из-за недоступного брокера.
    """

    def __init__(self, redis: "RedisClient", channel: str = "notifications") -> None:
        self._redis = redis
        self._channel = channel

    @property
    def channel(self) -> str:
        return self._channel

    @staticmethod
    def build_payload(change: dict[str, Any]) -> dict[str, Any]:
        """Оборачивает изменение в стандартный конверт уведомления."""
        return {
            "message": NOTIFICATION_MESSAGE,
            "data": change,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    async def notify(self, change: dict[str, Any]) -> bool:
        """
        Публикует изменение в канал уведомлений.

        Args:
            change: {"type": "...", "data": {...}} и т.п.

        Returns:
            True если сообщение опубликовано
        """
        payload = self.build_payload(change)
        try:
            receivers = await self._redis.publish_json(self._channel, payload)
        except Exception as e:
            await log_error(
                f"Ошибка публикации уведомления {change.get('type')}: {e}",
                exc_info=True,
            )
            return False

        await log_info(
            f"Уведомление {change.get('type')} опубликовано ({receivers} получателей)",
            type_msg=TypeMsg.DEBUG,
        )
        return True
