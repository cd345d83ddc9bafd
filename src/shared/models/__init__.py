# src/shared/models/__init__.py
"""
Общие DTO и Pydantic-модели.
"""

from src.shared.models.common import (
    CamelModel,
    RequestModel,
    MessageResponse,
    ErrorResponse,
    HealthStatus,
)
from src.shared.models.enums import (
    ClientType,
    DriverApprovalStatus,
    TransportType,
    TransportStatus,
)
from src.shared.models.client_dto import ClientDTO
from src.shared.models.driver_dto import DriverDTO, DriverBaseDTO
from src.shared.models.vehicle_dto import VehicleDTO
from src.shared.models.transport_dto import TransportDTO
from src.shared.models.user_dto import UserDTO

__all__ = [
    "CamelModel",
    "RequestModel",
    "MessageResponse",
    "ErrorResponse",
    "HealthStatus",
    "ClientType",
    "DriverApprovalStatus",
    "TransportType",
    "TransportStatus",
    "ClientDTO",
    "DriverDTO",
    "DriverBaseDTO",
    "VehicleDTO",
    "TransportDTO",
    "UserDTO",
]
