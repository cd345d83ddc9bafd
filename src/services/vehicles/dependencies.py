from src.infra.database import DatabaseManager
from src.services.notifications.dependencies import get_notification_service
from src.services.vehicles.repository import VehicleRepository
from src.services.vehicles.service import VehicleService

def get_database() -> DatabaseManager:
    return DatabaseManager()

def get_vehicle_repository() -> VehicleRepository:
    return VehicleRepository(get_database())

def get_vehicle_service() -> VehicleService:
    return VehicleService(get_vehicle_repository(), get_notification_service())
