from src.infra.database import DatabaseManager
from src.services.clients.repository import ClientRepository
from src.services.clients.service import ClientService

def get_database() -> DatabaseManager:
    return DatabaseManager()

def get_client_repository() -> ClientRepository:
    return ClientRepository(get_database())

def get_client_service() -> ClientService:
    return ClientService(get_client_repository())
