from src.infra.database import DatabaseManager
from src.services.drivers.repository import DriverRepository
from src.services.notifications.dependencies import get_notification_service
from src.services.transports.repository import TransportRepository
from src.services.transports.service import TransportService
from src.services.vehicles.repository import VehicleRepository

def get_database() -> DatabaseManager:
    return DatabaseManager()

def get_transport_repository() -> TransportRepository:
    return TransportRepository(get_database())

def get_transport_service() -> TransportService:
    db = get_database()
    return TransportService(
        get_transport_repository(),
        DriverRepository(db),
        VehicleRepository(db),
        get_notification_service(),
    )
