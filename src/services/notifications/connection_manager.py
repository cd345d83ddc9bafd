# src/services/notifications/connection_manager.py
"""
Менеджер WebSocket соединений.
Все подключённые клиенты получают все уведомления.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from fastapi import WebSocket

from src.common.logger import log_debug


@dataclass
class ConnectionInfo:
    """Информация о соединении."""
    websocket: WebSocket
    connection_id: str
    client_host: str | None = None
    connected_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ConnectionManager:
    """
    Менеджер WebSocket соединений.

    Поддерживает:
    - Подключение/отключение клиентов
    - Персональные сообщения (pong)
    - Broadcast уведомлений всем клиентам
    """

    def __init__(self) -> None:
        # connection_id -> ConnectionInfo
        self._connections: dict[str, ConnectionInfo] = {}

        # Для статистики
        self._total_connections: int = 0
        self._total_messages_sent: int = 0

    @property
    def active_connections(self) -> int:
        """Количество активных соединений."""
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> str:
        """
        Принять соединение и зарегистрировать его.

        Returns:
            Идентификатор соединения
        """
        await websocket.accept()

        connection_id = uuid4().hex
        client_host = websocket.client.host if websocket.client else None
        self._connections[connection_id] = ConnectionInfo(
            websocket=websocket,
            connection_id=connection_id,
            client_host=client_host,
        )
        self._total_connections += 1
        await log_debug(f"Сокет подключён: {connection_id} ({client_host})")
        return connection_id

    async def disconnect(self, connection_id: str) -> None:
        """Отключить клиента."""
        if self._connections.pop(connection_id, None) is not None:
            await log_debug(f"Сокет отключён: {connection_id}")

    async def send_personal(self, connection_id: str, message: dict[str, Any]) -> bool:
        """
        Отправить сообщение конкретному соединению.

        Returns:
            True если сообщение отправлено, False если соединения нет
        """
        conn = self._connections.get(connection_id)
        if conn is None:
            return False

        try:
            await conn.websocket.send_json(message)
        except Exception as e:
            # Соединение разорвано
            await log_debug(f"Не удалось отправить в {connection_id}: {e}")
            await self.disconnect(connection_id)
            return False

        self._total_messages_sent += 1
        return True

    async def broadcast_all(self, message: dict[str, Any]) -> int:
        """
        Отправить сообщение всем подключенным клиентам.

        Returns:
            Количество успешно отправленных сообщений
        """
        sent_count = 0
        failed: list[str] = []

        for connection_id, conn in list(self._connections.items()):
            try:
                await conn.websocket.send_json(message)
                sent_count += 1
                self._total_messages_sent += 1
            except Exception as e:
                await log_debug(f"Broadcast в {connection_id} не доставлен: {e}")
                failed.append(connection_id)

        for connection_id in failed:
            await self.disconnect(connection_id)

        return sent_count

    async def close_all(self) -> None:
        """Закрыть все соединения (остановка приложения)."""
        for connection_id, conn in list(self._connections.items()):
            try:
                await conn.websocket.close()
            except Exception as e:
                await log_debug(f"Ошибка закрытия сокета {connection_id}: {e}")
        self._connections.clear()

    def get_stats(self) -> dict[str, Any]:
        """Получить статистику."""
        return {
            "active_connections": len(self._connections),
            "total_connections_ever": self._total_connections,
            "total_messages_sent": self._total_messages_sent,
        }


# Глобальный экземпляр
manager = ConnectionManager()
