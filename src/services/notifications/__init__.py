# src/services/notifications/__init__.py
"""
Уведомления об изменениях.

Обеспечивает:
- Публикацию изменений (водители, ТС, перевозки) в Redis Pub/Sub
- WebSocket соединения для клиентов
- Рассылку всех сообщений канала подключённым сокетам
"""
