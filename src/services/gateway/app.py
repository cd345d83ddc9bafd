# src/services/gateway/app.py
"""
FastAPI приложение логистического бэкенда.

REST:
- /clients, /drivers, /vehicles, /transports, /users: CRUD
- /routing/calculate: расчёт маршрута по адресам
- /notifications/stats: статистика сокетов
- /health: проверка здоровья

WebSocket:
- /ws/notifications?token=...: уведомления об изменениях
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.common.constants import TypeMsg
from src.common.logger import log_info, setup_logging
from src.config import settings
from src.infra.database import close_db, get_db, init_db
from src.infra.redis_client import close_redis, get_redis, init_redis
from src.services.clients.routes import router as clients_router
from src.services.drivers.routes import router as drivers_router
from src.services.gateway.errors import register_exception_handlers
from src.services.gateway.middleware import bearer_auth_middleware, throttle_middleware
from src.services.notifications.dependencies import close_notifications, init_notifications
from src.services.notifications.routes import router as notifications_router
from src.services.notifications.routes import ws_router as notifications_ws_router
from src.services.routing.dependencies import close_routing, init_routing
from src.services.routing.routes import router as routing_router
from src.services.transports.routes import router as transports_router
from src.services.users.routes import router as users_router
from src.services.vehicles.routes import router as vehicles_router
from src.shared.models.common import HealthStatus

SERVICE_NAME = "logistics_backend"


# =============================================================================
# LIFESPAN
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Жизненный цикл приложения."""
    setup_logging()
    await log_info(f"{SERVICE_NAME} запускается...", type_msg=TypeMsg.INFO)

    await init_db()
    await init_redis()
    await init_notifications(get_redis(), settings.notifications.NOTIFICATIONS_CHANNEL)
    await init_routing()

    await log_info(
        f"{SERVICE_NAME} готов: порт {settings.deployment.API_PORT}",
        type_msg=TypeMsg.INFO,
    )

    yield

    # Закрытие ресурсов в обратном порядке
    await close_routing()
    await close_notifications()
    await close_redis()
    await close_db()
    await log_info(f"{SERVICE_NAME} остановлен", type_msg=TypeMsg.INFO)


# =============================================================================
# ПРИЛОЖЕНИЕ
# =============================================================================

def create_app() -> FastAPI:
    app = FastAPI(
        title="Logistics Backend",
        description="Клиенты, водители, ТС, перевозки, пользователи и расчёт маршрутов.",
        version=settings.system.VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    register_exception_handlers(app)

    # Последний добавленный middleware выполняется первым: CORS -> auth -> throttle
    app.middleware("http")(throttle_middleware)
    app.middleware("http")(bearer_auth_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    prefix = settings.deployment.API_PREFIX
    for router in (
        clients_router,
        drivers_router,
        vehicles_router,
        transports_router,
        users_router,
        routing_router,
        notifications_router,
    ):
        app.include_router(router, prefix=prefix)
    app.include_router(notifications_ws_router)

    app.add_api_route("/health", health_check, methods=["GET"], response_model=HealthStatus, tags=["Health"])
    return app


# =============================================================================
# HEALTH CHECK
# =============================================================================

async def health_check() -> HealthStatus:
    """Проверка здоровья сервиса: PostgreSQL и Redis."""
    deps = {
        "postgres": "healthy" if await get_db().health_check() else "unhealthy",
        "redis": "healthy" if await get_redis().health_check() else "unhealthy",
    }
    overall = "healthy" if all(v == "healthy" for v in deps.values()) else "degraded"

    return HealthStatus(
        service=SERVICE_NAME,
        status=overall,
        version=settings.system.VERSION,
        dependencies=deps,
    )


app = create_app()
