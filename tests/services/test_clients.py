# tests/services/test_clients.py
"""
Тесты клиентов: репозиторий и сервис.
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import asyncpg
import pytest

from src.common.exceptions import ConflictError, NotFoundError
from src.services.clients.repository import ClientRepository
from src.services.clients.service import ClientService
from src.shared.models.client_dto import ClientDTO, CreateClientRequest, UpdateClientRequest
from src.shared.models.enums import ClientType

ADDRESS = {
    "street": "Rua A",
    "number": "10",
    "neighborhood": "Centro",
    "city": "São Paulo",
    "state": "SP",
    "zipcode": "01000-000",
}


class TestClientRepository:
    """SQL клиентов поверх мока соединения."""

    @pytest.mark.asyncio
    async def test_create(self, mock_db: MagicMock, mock_conn: MagicMock, client_row: dict[str, Any]) -> None:
        mock_conn.fetchrow.return_value = client_row

        client = await ClientRepository(mock_db).create({"name": "Empresa Teste", "email": "contato@empresa.com"})

        assert client.id == client_row["id"]
        assert client.client_type == ClientType.COMPANY
        query = mock_conn.fetchrow.await_args.args[0]
        assert "INSERT INTO clients" in query

    @pytest.mark.asyncio
    async def test_get_all_hides_removed(
        self, mock_db: MagicMock, mock_conn: MagicMock, client_row: dict[str, Any]
    ) -> None:
        mock_conn.fetch.return_value = [client_row]

        clients = await ClientRepository(mock_db).get_all()

        assert len(clients) == 1
        assert "removed_at IS NULL" in mock_conn.fetch.await_args.args[0]

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self, mock_db: MagicMock, mock_conn: MagicMock) -> None:
        assert await ClientRepository(mock_db).get_by_id(uuid4()) is None

    @pytest.mark.asyncio
    async def test_update_without_changes_reads_row(
        self, mock_db: MagicMock, mock_conn: MagicMock, client_row: dict[str, Any]
    ) -> None:
        mock_conn.fetchrow.return_value = client_row

        client = await ClientRepository(mock_db).update(client_row["id"], {"id": "ignored"})

        assert client is not None
        assert "SELECT" in mock_conn.fetchrow.await_args.args[0]

    @pytest.mark.asyncio
    async def test_soft_delete(self, mock_db: MagicMock, mock_conn: MagicMock) -> None:
        client_id = uuid4()
        mock_conn.fetchval.return_value = client_id

        assert await ClientRepository(mock_db).soft_delete(client_id, "user-1") is True
        query, *params = mock_conn.fetchval.await_args.args
        assert "removed_at = NOW()" in query
        assert params == [client_id, "user-1"]

    @pytest.mark.asyncio
    async def test_soft_delete_missing(self, mock_db: MagicMock, mock_conn: MagicMock) -> None:
        assert await ClientRepository(mock_db).soft_delete(uuid4(), "user-1") is False


class TestClientService:
    """Бизнес-логика клиентов."""

    @pytest.fixture
    def repo(self) -> MagicMock:
        return MagicMock(spec=ClientRepository)

    @pytest.mark.asyncio
    async def test_create_formats_address(self, repo: MagicMock, client_row: dict[str, Any]) -> None:
        repo.create = AsyncMock(return_value=ClientDTO(**client_row))
        request = CreateClientRequest(
            name="Empresa Teste",
            email="contato@empresa.com",
            address=ADDRESS,
            clientType="COMPANY",
            cnpj="12345678000199",
        )

        await ClientService(repo).create_client(request, "user-1")

        values = repo.create.await_args.args[0]
        assert values["address"] == "Rua A, 10, Centro, São Paulo, SP, 01000-000"
        assert values["created_by"] == "user-1"
        assert values["client_type"] == "COMPANY"

    @pytest.mark.asyncio
    async def test_create_duplicate_email(self, repo: MagicMock) -> None:
        repo.create = AsyncMock(side_effect=asyncpg.UniqueViolationError("clients_email_key"))
        request = CreateClientRequest(name="X", email="x@example.com")

        with pytest.raises(ConflictError, match="Error creating client"):
            await ClientService(repo).create_client(request, "user-1")

    @pytest.mark.asyncio
    async def test_get_missing(self, repo: MagicMock) -> None:
        repo.get_by_id = AsyncMock(return_value=None)
        client_id = uuid4()

        with pytest.raises(NotFoundError) as exc_info:
            await ClientService(repo).get_client(client_id)

        assert exc_info.value.message == f"Client with id {client_id} not found"

    @pytest.mark.asyncio
    async def test_update_keeps_address_when_absent(self, repo: MagicMock, client_row: dict[str, Any]) -> None:
        client = ClientDTO(**client_row)
        repo.get_by_id = AsyncMock(return_value=client)
        repo.update = AsyncMock(return_value=client)

        await ClientService(repo).update_client(client.id, UpdateClientRequest(notes="VIP"), "user-2")

        updates = repo.update.await_args.args[1]
        assert updates == {"notes": "VIP", "updated_by": "user-2"}

    @pytest.mark.asyncio
    async def test_update_replaces_address(self, repo: MagicMock, client_row: dict[str, Any]) -> None:
        client = ClientDTO(**client_row)
        repo.get_by_id = AsyncMock(return_value=client)
        repo.update = AsyncMock(return_value=client)

        await ClientService(repo).update_client(client.id, UpdateClientRequest(address={**ADDRESS, "number": "20"}), "u")

        assert repo.update.await_args.args[1]["address"].startswith("Rua A, 20,")

    @pytest.mark.asyncio
    async def test_update_missing(self, repo: MagicMock) -> None:
        repo.get_by_id = AsyncMock(return_value=None)
        repo.update = AsyncMock()

        with pytest.raises(NotFoundError):
            await ClientService(repo).update_client(uuid4(), UpdateClientRequest(notes="x"), "u")

        repo.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_remove(self, repo: MagicMock) -> None:
        repo.soft_delete = AsyncMock(return_value=True)

        result = await ClientService(repo).remove_client(uuid4(), "user-1")

        assert result == {"message": "Client successfully removed (soft delete)"}

    @pytest.mark.asyncio
    async def test_remove_missing(self, repo: MagicMock) -> None:
        repo.soft_delete = AsyncMock(return_value=False)

        with pytest.raises(NotFoundError):
            await ClientService(repo).remove_client(uuid4(), "user-1")
