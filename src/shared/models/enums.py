from enum import Enum

class ClientType(str, Enum):
    """Тип клиента."""
    INDIVIDUAL = "INDIVIDUAL"
    COMPANY = "COMPANY"

    def __str__(self) -> str:
        return self.value

class DriverApprovalStatus(str, Enum):
    """Статус проверки документов водителя."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    def __str__(self) -> str:
        return self.value

class TransportType(str, Enum):
    """Тип перевозки."""
    FREIGHT = "FREIGHT"
    LAST_MILE = "LAST_MILE"
    FTL = "FTL"
    LTL = "LTL"

    def __str__(self) -> str:
        return self.value

class TransportStatus(str, Enum):
    """Статус перевозки."""
    SCHEDULED = "SCHEDULED"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    def __str__(self) -> str:
        return self.value
