#!/usr/bin/env python3
# main.py
"""
Главная точка входа логистического бэкенда.
Запускает HTTP API (uvicorn). Подключения к PostgreSQL и Redis
открываются в lifespan приложения.
"""

from __future__ import annotations

import asyncio
import signal
import sys

import uvicorn

from src.config import settings
from src.common.logger import setup_logging, log_info, log_error
from src.common.constants import TypeMsg


APP_PATH = "src.services.gateway.app:app"

# Сервер uvicorn для graceful shutdown по сигналу
_server: uvicorn.Server | None = None


def setup_signal_handlers() -> None:
    """Настраивает обработчики сигналов для graceful shutdown."""

    def signal_handler(sig: int) -> None:
        """Обработчик сигналов SIGINT и SIGTERM."""
        if _server is not None and not _server.should_exit:
            _server.should_exit = True

    try:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))
    except NotImplementedError:
        # Windows не поддерживает add_signal_handler
        signal.signal(signal.SIGINT, lambda s, f: signal_handler(s))
        signal.signal(signal.SIGTERM, lambda s, f: signal_handler(s))


def build_server_config() -> uvicorn.Config:
    """Конфигурация uvicorn из настроек."""
    return uvicorn.Config(
        APP_PATH,
        host=settings.deployment.API_HOST,
        port=settings.deployment.API_PORT,
        log_level="debug" if settings.system.DEBUG else "info",
        # Логирование настраивает src.common.logger
        log_config=None,
    )


async def main() -> None:
    """Запуск API до сигнала остановки."""
    global _server

    setup_logging()

    _server = uvicorn.Server(build_server_config())
    setup_signal_handlers()

    await log_info(
        f"{settings.system.PROJECT_NAME} v{settings.system.VERSION}: "
        f"API на {settings.deployment.API_HOST}:{settings.deployment.API_PORT}",
        type_msg=TypeMsg.INFO,
    )

    try:
        await _server.serve()
    except asyncio.CancelledError:
        await log_info("Задача отменена, выполняется graceful shutdown", type_msg=TypeMsg.INFO)
    except Exception as e:
        await log_error(f"Критическая ошибка: {e}", exc_info=True)
        raise
    finally:
        await log_info("API остановлен", type_msg=TypeMsg.INFO)


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1].lower() in ("--help", "-h"):
        print("Использование: python main.py\nСоздание БД: python create_db.py")
        sys.exit(0)

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
