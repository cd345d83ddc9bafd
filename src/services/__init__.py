# src/services/__init__.py
"""
HTTP сервисы логистического бэкенда.

Архитектура:
- Одно FastAPI-приложение (gateway) подключает роутеры всех сервисов
- Каждый сервис: routes -> service -> repository (asyncpg)
- Redis: Pub/Sub уведомлений и счётчики throttling

Сервисы:
- clients: клиенты (мягкое удаление)
- drivers: водители, их ТС и документы
- vehicles: транспортные средства
- transports: перевозки с водителем и ТС
- users: пользователи, блокировка и бан
- routing: расчёт маршрута по адресам
- notifications: публикация изменений и WebSocket
- gateway: приложение, авторизация, throttling, ошибки
"""

__all__: list[str] = []
