from src.infra.database import DatabaseManager
from src.services.drivers.repository import DriverRepository
from src.services.drivers.service import DriverService
from src.services.notifications.dependencies import get_notification_service
from src.services.vehicles.repository import VehicleRepository

def get_database() -> DatabaseManager:
    return DatabaseManager()

def get_driver_repository() -> DriverRepository:
    return DriverRepository(get_database())

def get_driver_service() -> DriverService:
    return DriverService(
        get_driver_repository(),
        VehicleRepository(get_database()),
        get_notification_service(),
    )
