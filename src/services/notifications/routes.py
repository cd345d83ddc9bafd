# src/services/notifications/routes.py
"""
WebSocket уведомлений и статистика соединений.

WebSocket endpoints:
- /ws/notifications?token=<SOCKET_AUTH_TOKEN>

REST endpoints:
- GET /notifications/stats
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status
from pydantic import BaseModel

from src.common.logger import log_warning
from src.config import settings
from src.services.gateway.security import extract_bearer_token, tokens_match
from src.services.notifications.connection_manager import ConnectionManager
from src.services.notifications.dependencies import get_connection_manager

router = APIRouter(tags=["notifications"])
ws_router = APIRouter()


class StatsResponse(BaseModel):
    """Статистика соединений."""
    active_connections: int
    total_connections_ever: int
    total_messages_sent: int


@router.get("/notifications/stats", response_model=StatsResponse)
async def get_stats(
    connections: ConnectionManager = Depends(get_connection_manager),
) -> StatsResponse:
    return StatsResponse(**connections.get_stats())


@ws_router.websocket("/ws/notifications")
async def notifications_socket(
    websocket: WebSocket,
    token: str | None = Query(default=None),
) -> None:
    """
    Сокет уведомлений.

    Токен передаётся в query (?token=) или заголовком Authorization: Bearer.
    Неверный токен: соединение закрывается с кодом 1008 до accept.

    Входящие сообщения:
    - {"action": "ping"} -> {"type": "pong"}
    """
    provided = token or extract_bearer_token(websocket.headers.get("authorization"))
    if not tokens_match(provided, settings.auth.SOCKET_AUTH_TOKEN):
        client_host = websocket.client.host if websocket.client else None
        await log_warning(f"Сокет отклонён: неверный токен ({client_host})")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    connections = get_connection_manager()
    connection_id = await connections.connect(websocket)

    try:
        while True:
            try:
                data = await websocket.receive_json()
            except json.JSONDecodeError:
                await log_warning(f"Сокет {connection_id}: сообщение не JSON")
                continue
            await _handle_client_message(connections, connection_id, data)
    except WebSocketDisconnect:
        pass
    finally:
        await connections.disconnect(connection_id)


async def _handle_client_message(
    connections: ConnectionManager,
    connection_id: str,
    data: Any,
) -> None:
    """Обработать сообщение от клиента."""
    if not isinstance(data, dict):
        return

    if data.get("action") == "ping":
        await connections.send_personal(connection_id, {"type": "pong"})
