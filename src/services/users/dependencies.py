from src.infra.database import DatabaseManager
from src.services.users.repository import UserRepository
from src.services.users.service import UserService

def get_database() -> DatabaseManager:
    return DatabaseManager()

def get_user_repository() -> UserRepository:
    return UserRepository(get_database())

def get_user_service() -> UserService:
    return UserService(get_user_repository())
