# src/common/constants.py
"""
Общие константы и перечисления.
"""

from enum import Enum


class TypeMsg(str, Enum):
    """Типы сообщений для логирования."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class NotificationType(str, Enum):
    """Типы изменений, рассылаемых подписчикам сокета."""
    DRIVER_CREATED = "DRIVER_CREATED"
    DRIVER_UPDATED = "DRIVER_UPDATED"
    DRIVER_REMOVED = "DRIVER_REMOVED"
    DRIVER_VEHICLE_ASSIGNED = "DRIVER_VEHICLE_ASSIGNED"
    DRIVER_DOCUMENTS_UPDATED = "DRIVER_DOCUMENTS_UPDATED"
    CREATE_VEHICLE = "CREATE_VEHICLE"
    UPDATE_VEHICLE = "UPDATE_VEHICLE"
    REMOVE_VEHICLE = "REMOVE_VEHICLE"
    CREATE_TRANSPORT = "CREATE_TRANSPORT"
    UPDATE_TRANSPORT = "UPDATE_TRANSPORT"
    REMOVE_TRANSPORT = "REMOVE_TRANSPORT"

    def __str__(self) -> str:
        return self.value


# Заголовок с идентификатором пользователя, выполняющего изменение
USER_ID_HEADER = "x-user-id"

NOTIFICATION_MESSAGE = "A change has been made"
