# tests/services/test_users.py
"""
Тесты пользователей: хэширование пароля, блокировка и бан.
"""

import hashlib
import hmac
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import asyncpg
import pytest

from src.common.exceptions import ConflictError, NotFoundError
from src.services.users.passwords import hash_password
from src.services.users.repository import USER_COLUMNS, UserRepository
from src.services.users.service import USER_REMOVED_MESSAGE, UserService
from src.shared.models.user_dto import CreateUserRequest, UpdateUserRequest, UserDTO


def password_matches(password: str, stored: str) -> bool:
    """Пересчитывает PBKDF2 по сохранённым итерациям и соли."""
    _, iterations, salt_hex, digest_hex = stored.split("$")
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), bytes.fromhex(salt_hex), int(iterations))
    return hmac.compare_digest(digest.hex(), digest_hex)


class TestPasswords:
    def test_roundtrip(self) -> None:
        stored = hash_password("s3cret!", iterations=1000)

        assert stored.startswith("pbkdf2_sha256$1000$")
        assert password_matches("s3cret!", stored) is True
        assert password_matches("wrong", stored) is False

    def test_salted(self) -> None:
        assert hash_password("same", iterations=1000) != hash_password("same", iterations=1000)

    def test_fixed_salt_is_deterministic(self) -> None:
        salt = b"0123456789abcdef"
        assert hash_password("x", iterations=1000, salt=salt) == hash_password("x", iterations=1000, salt=salt)


class TestUserRepository:
    def test_password_never_selected(self) -> None:
        assert "password" not in USER_COLUMNS

    @pytest.mark.asyncio
    async def test_create(self, mock_db: MagicMock, mock_conn: MagicMock, user_row: dict[str, Any]) -> None:
        mock_conn.fetchrow.return_value = user_row

        user = await UserRepository(mock_db).create({"name": "Admin", "email": "admin@example.com", "password": "h"})

        assert user.email == "admin@example.com"
        assert "password" in mock_conn.fetchrow.await_args.args[0]


class TestUserService:
    @pytest.fixture
    def repo(self) -> MagicMock:
        return MagicMock(spec=UserRepository)

    @pytest.mark.asyncio
    async def test_create_hashes_password(self, repo: MagicMock, user_row: dict[str, Any]) -> None:
        repo.create = AsyncMock(return_value=UserDTO(**user_row))

        user = await UserService(repo).create_user(
            CreateUserRequest(name="Admin", email="admin@example.com", password="secret1")
        )

        stored = repo.create.await_args.args[0]["password"]
        assert stored != "secret1"
        assert password_matches("secret1", stored)
        assert "password" not in user.model_dump()

    @pytest.mark.asyncio
    async def test_create_duplicate_email(self, repo: MagicMock) -> None:
        repo.create = AsyncMock(side_effect=asyncpg.UniqueViolationError("users_email_key"))

        with pytest.raises(ConflictError):
            await UserService(repo).create_user(CreateUserRequest(name="A", email="a@example.com", password="secret1"))

    @pytest.mark.asyncio
    async def test_update_without_password(self, repo: MagicMock, user_row: dict[str, Any]) -> None:
        repo.update = AsyncMock(return_value=UserDTO(**user_row))

        await UserService(repo).update_user(user_row["id"], UpdateUserRequest(phone="+55119"))

        assert repo.update.await_args.args[1] == {"phone": "+55119"}

    @pytest.mark.asyncio
    async def test_update_rehashes_password(self, repo: MagicMock, user_row: dict[str, Any]) -> None:
        repo.update = AsyncMock(return_value=UserDTO(**user_row))

        await UserService(repo).update_user(user_row["id"], UpdateUserRequest(password="newpass1"))

        assert password_matches("newpass1", repo.update.await_args.args[1]["password"])

    @pytest.mark.asyncio
    async def test_hashing_runs_in_thread(self, repo: MagicMock, user_row: dict[str, Any]) -> None:
        """PBKDF2 не выполняется в event loop: create и update уходят в asyncio.to_thread."""
        repo.create = AsyncMock(return_value=UserDTO(**user_row))
        repo.update = AsyncMock(return_value=UserDTO(**user_row))
        service = UserService(repo)

        with patch("src.services.users.service.asyncio.to_thread", new_callable=AsyncMock, return_value="hashed") as to_thread:
            await service.create_user(CreateUserRequest(name="Admin", email="admin@example.com", password="secret1"))
            await service.update_user(user_row["id"], UpdateUserRequest(password="newpass1"))

        assert [c.args for c in to_thread.await_args_list] == [
            (hash_password, "secret1"),
            (hash_password, "newpass1"),
        ]
        assert repo.create.await_args.args[0]["password"] == "hashed"
        assert repo.update.await_args.args[1]["password"] == "hashed"

    @pytest.mark.asyncio
    async def test_get_missing(self, repo: MagicMock) -> None:
        repo.get_by_id = AsyncMock(return_value=None)
        user_id = uuid4()

        with pytest.raises(NotFoundError, match=f"User with id {user_id} not found"):
            await UserService(repo).get_user(user_id)

    @pytest.mark.asyncio
    async def test_remove(self, repo: MagicMock) -> None:
        repo.delete = AsyncMock(return_value=True)
        assert await UserService(repo).remove_user(uuid4()) == {"message": USER_REMOVED_MESSAGE}

    @pytest.mark.asyncio
    async def test_block_and_unblock(self, repo: MagicMock, user_row: dict[str, Any]) -> None:
        repo.update = AsyncMock(return_value=UserDTO(**{**user_row, "is_blocked": True, "block_reason": "spam"}))
        service = UserService(repo)

        user = await service.block_user(user_row["id"], "spam")
        assert user.is_blocked is True
        assert repo.update.await_args.args[1] == {"is_blocked": True, "block_reason": "spam"}

        await service.unblock_user(user_row["id"])
        assert repo.update.await_args.args[1] == {"is_blocked": False, "block_reason": None}

    @pytest.mark.asyncio
    async def test_ban_and_unban(self, repo: MagicMock, user_row: dict[str, Any]) -> None:
        repo.update = AsyncMock(return_value=UserDTO(**user_row))
        service = UserService(repo)

        await service.ban_user(user_row["id"], "fraud")
        assert repo.update.await_args.args[1] == {"is_banned": True, "ban_reason": "fraud"}

        await service.unban_user(user_row["id"])
        assert repo.update.await_args.args[1] == {"is_banned": False, "ban_reason": None}

    @pytest.mark.asyncio
    async def test_block_missing(self, repo: MagicMock) -> None:
        repo.update = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await UserService(repo).block_user(uuid4(), "spam")
