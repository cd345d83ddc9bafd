# tests/services/test_gateway_app.py
"""
Тесты HTTP шлюза: авторизация, throttling, формат ошибок, health, сокет уведомлений.
Сервисы подменяются через app.dependency_overrides, lifespan не запускается.
"""

from __future__ import annotations

import os
from typing import Any, Iterator
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from src.core.geo.errors import GeocodingFailure, GeocodingFailureKind, RouteComputationFailure
from src.core.geo.models import RouteResult
from src.services.clients.dependencies import get_client_service
from src.services.drivers.dependencies import get_driver_service
from src.services.gateway.app import app
from src.services.gateway.middleware import THROTTLE_MESSAGE
from src.services.gateway.security import extract_bearer_token, is_path_excluded, tokens_match
from src.services.routing.dependencies import get_route_aggregator
from src.services.transports.dependencies import get_transport_service
from src.services.users.dependencies import get_user_service
from src.services.vehicles.dependencies import get_vehicle_service
from src.common.exceptions import NotFoundError
from src.shared.models.client_dto import ClientDTO
from src.shared.models.user_dto import UserDTO
from src.shared.models.vehicle_dto import VehicleDTO

API_TOKEN = os.environ["API_SECRET_TOKEN"]
SOCKET_TOKEN = os.environ["SOCKET_AUTH_TOKEN"]


@pytest.fixture
def throttle_redis(mock_redis: MagicMock) -> Iterator[MagicMock]:
    """Счётчик throttling в Redis (по умолчанию первый запрос окна)."""
    with patch("src.services.gateway.middleware.get_redis", return_value=mock_redis):
        yield mock_redis


@pytest.fixture
def client(throttle_redis: MagicMock) -> Iterator[TestClient]:
    yield TestClient(app)
    app.dependency_overrides.clear()


def override(dependency, service: Any) -> Any:
    app.dependency_overrides[dependency] = lambda: service
    return service


# =============================================================================
# security helpers
# =============================================================================

class TestSecurityHelpers:
    @pytest.mark.parametrize(
        "header, expected",
        [
            ("Bearer abc", "abc"),
            ("bearer   abc  ", "abc"),
            ("Basic abc", None),
            ("Bearer ", None),
            (None, None),
        ],
    )
    def test_extract_bearer_token(self, header, expected) -> None:
        assert extract_bearer_token(header) == expected

    def test_empty_secret_never_matches(self) -> None:
        assert tokens_match("", "") is False
        assert tokens_match("x", "") is False
        assert tokens_match("x", "x") is True

    def test_excluded_prefixes(self) -> None:
        prefixes = ["/health", "/docs"]
        assert is_path_excluded("/health", prefixes)
        assert is_path_excluded("/docs/oauth2-redirect", prefixes)
        assert not is_path_excluded("/healthz", prefixes)
        assert not is_path_excluded("/clients", prefixes)


# =============================================================================
# Авторизация
# =============================================================================

class TestBearerAuth:
    def test_no_token(self, client: TestClient) -> None:
        response = client.get("/clients")

        assert response.status_code == 401
        assert response.json() == {"statusCode": 401, "message": "No token provided.", "error": "Unauthorized"}

    def test_invalid_token(self, client: TestClient) -> None:
        response = client.get("/clients", headers={"Authorization": "Bearer wrong"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token."

    @pytest.mark.parametrize("header", ["Basic abc", "abc", f"Token {API_TOKEN}"])
    def test_foreign_scheme_is_invalid_token(self, client: TestClient, header: str) -> None:
        """Заголовок есть, но это не Bearer с верным токеном."""
        response = client.get("/clients", headers={"Authorization": header})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token."

    def test_blank_header_is_no_token(self, client: TestClient) -> None:
        response = client.get("/clients", headers={"Authorization": ""})

        assert response.status_code == 401
        assert response.json()["message"] == "No token provided."

    def test_health_is_public(self, client: TestClient) -> None:
        with patch("src.services.gateway.app.get_db") as get_db, patch("src.services.gateway.app.get_redis") as get_redis:
            get_db.return_value.health_check = AsyncMock(return_value=True)
            get_redis.return_value.health_check = AsyncMock(return_value=True)
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_preflight_skips_auth(self, client: TestClient) -> None:
        response = client.options(
            "/clients",
            headers={"Origin": "http://localhost:4200", "Access-Control-Request-Method": "GET"},
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:4200"


# =============================================================================
# Throttling
# =============================================================================

class TestThrottle:
    def test_over_limit(self, client: TestClient, throttle_redis: MagicMock, auth_headers: dict[str, str]) -> None:
        throttle_redis.incr_window.return_value = 11

        response = client.get("/clients", headers=auth_headers)

        assert response.status_code == 429
        assert response.json() == {
            "statusCode": 429,
            "message": THROTTLE_MESSAGE,
            "error": "Too Many Requests",
        }
        assert response.headers["retry-after"] == "60"

    def test_counter_per_ip(self, client: TestClient, throttle_redis: MagicMock, auth_headers: dict[str, str]) -> None:
        override(get_client_service, MagicMock(list_clients=AsyncMock(return_value=[])))

        client.get("/clients", headers={**auth_headers, "X-Forwarded-For": "203.0.113.7, 10.0.0.1"})

        key, ttl = throttle_redis.incr_window.await_args.args
        assert key == "throttle:203.0.113.7"
        assert ttl == 60

    def test_redis_down_fails_open(
        self, client: TestClient, throttle_redis: MagicMock, auth_headers: dict[str, str]
    ) -> None:
        throttle_redis.incr_window.side_effect = ConnectionError("redis down")
        override(get_client_service, MagicMock(list_clients=AsyncMock(return_value=[])))

        response = client.get("/clients", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == []


# =============================================================================
# Ошибки
# =============================================================================

class TestErrorMapping:
    def test_missing_user_header(self, client: TestClient) -> None:
        service = override(get_client_service, MagicMock(create_client=AsyncMock()))

        response = client.post(
            "/clients",
            json={"name": "Ana", "email": "ana@example.com"},
            headers={"Authorization": f"Bearer {API_TOKEN}"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "User id header (x-user-id) is required"
        service.create_client.assert_not_called()

    def test_validation_errors_are_400(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        override(get_client_service, MagicMock(create_client=AsyncMock()))

        response = client.post("/clients", json={"email": "not-an-email", "salary": 1}, headers=auth_headers)

        body = response.json()
        assert response.status_code == 400
        assert body["error"] == "Bad Request"
        assert isinstance(body["message"], list)
        assert any(message.startswith("name:") for message in body["message"])
        assert any(message.startswith("salary:") for message in body["message"])

    def test_invalid_uuid(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        override(get_vehicle_service, MagicMock(get_vehicle=AsyncMock()))

        response = client.get("/vehicles/not-a-uuid", headers=auth_headers)

        assert response.status_code == 400

    def test_not_found(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        vehicle_id = uuid4()
        override(
            get_vehicle_service,
            MagicMock(get_vehicle=AsyncMock(side_effect=NotFoundError.for_entity("Vehicle", vehicle_id))),
        )

        response = client.get(f"/vehicles/{vehicle_id}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {
            "statusCode": 404,
            "message": f"Vehicle with id {vehicle_id} not found",
            "error": "Not Found",
        }


# =============================================================================
# CRUD маршруты
# =============================================================================

class TestCrudRoutes:
    def test_create_client(
        self, client: TestClient, auth_headers: dict[str, str], client_row: dict[str, Any]
    ) -> None:
        service = override(get_client_service, MagicMock(create_client=AsyncMock(return_value=ClientDTO(**client_row))))

        response = client.post(
            "/clients",
            json={"name": "Empresa Teste", "email": "contato@empresa.com", "clientType": "COMPANY"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["clientType"] == "COMPANY"
        assert response.json()["createdBy"] == "user-1"
        assert service.create_client.await_args.args[1] == "user-1"

    def test_list_drivers_fields(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        service = override(get_driver_service, MagicMock(list_drivers=AsyncMock(return_value=[{"id": "1", "name": "Ana"}])))

        response = client.get("/drivers?fields=name, vehicles", headers=auth_headers)

        assert response.status_code == 200
        service.list_drivers.assert_awaited_once_with(["name", "vehicles"])

    def test_remove_vehicle(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        override(
            get_vehicle_service,
            MagicMock(remove_vehicle=AsyncMock(return_value={"message": "Vehicle successfully removed"})),
        )

        response = client.delete(f"/vehicles/{uuid4()}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Vehicle successfully removed"}

    def test_create_vehicle_body(
        self, client: TestClient, auth_headers: dict[str, str], vehicle_row: dict[str, Any]
    ) -> None:
        service = override(get_vehicle_service, MagicMock(create_vehicle=AsyncMock(return_value=VehicleDTO(**vehicle_row))))

        response = client.post(
            "/vehicles",
            json={"plate": "ABC1D23", "brand": "Volvo", "model": "FH 540", "year": 2022},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["driverId"] is None
        assert service.create_vehicle.await_args.args[0].year == 2022

    def test_transport_list(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        override(get_transport_service, MagicMock(list_transports=AsyncMock(return_value=[])))

        response = client.get("/transports", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == []

    def test_block_user(self, client: TestClient, auth_headers: dict[str, str], user_row: dict[str, Any]) -> None:
        blocked = UserDTO(**{**user_row, "is_blocked": True, "block_reason": "spam"})
        service = override(get_user_service, MagicMock(block_user=AsyncMock(return_value=blocked)))

        response = client.patch(f"/users/{user_row['id']}/block", json={"blockReason": "spam"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["isBlocked"] is True
        assert "password" not in response.json()
        service.block_user.assert_awaited_once_with(user_row["id"], "spam")


# =============================================================================
# Маршруты
# =============================================================================

class TestRoutingEndpoint:
    def test_calculate(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        aggregator = override(
            get_route_aggregator,
            MagicMock(calculate_route=AsyncMock(return_value=RouteResult(distance=10000, duration=1800))),
        )

        response = client.post(
            "/routing/calculate",
            json={"originAddress": "Origem", "destinationAddress": "Destino", "stopsAddresses": ["Parada"]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["distance_km"] == 10.0
        assert body["duration_minutes"] == 30.0
        assert body["duration_hours"] == 0.5
        aggregator.calculate_route.assert_awaited_once_with("Origem", "Destino", ["Parada"])

    @pytest.mark.parametrize("extra", [{"stopsAddresses": None}, {}])
    def test_null_or_missing_stops(self, client: TestClient, auth_headers: dict[str, str], extra) -> None:
        """stopsAddresses: null означает маршрут без промежуточных точек."""
        aggregator = override(
            get_route_aggregator,
            MagicMock(calculate_route=AsyncMock(return_value=RouteResult(distance=1, duration=1))),
        )

        response = client.post(
            "/routing/calculate",
            json={"originAddress": "A", "destinationAddress": "B", **extra},
            headers=auth_headers,
        )

        assert response.status_code == 200
        aggregator.calculate_route.assert_awaited_once_with("A", "B", [])

    def test_geocoding_failure_is_400(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        failure = GeocodingFailure("Rua X", "Address not found", GeocodingFailureKind.ADDRESS_NOT_FOUND)
        override(get_route_aggregator, MagicMock(calculate_route=AsyncMock(side_effect=failure)))

        response = client.post(
            "/routing/calculate",
            json={"originAddress": "Rua X", "destinationAddress": "Destino"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == 'Error geocoding address "Rua X": Address not found'

    def test_route_failure_is_400(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        failure = RouteComputationFailure("Impossible route between points")
        override(get_route_aggregator, MagicMock(calculate_route=AsyncMock(side_effect=failure)))

        response = client.post(
            "/routing/calculate",
            json={"originAddress": "A", "destinationAddress": "B"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Error calculating route: Impossible route between points"

    def test_missing_origin(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        override(get_route_aggregator, MagicMock(calculate_route=AsyncMock()))

        response = client.post("/routing/calculate", json={"destinationAddress": "B"}, headers=auth_headers)

        assert response.status_code == 400
        assert "originAddress: Field required" in response.json()["message"]


# =============================================================================
# Health
# =============================================================================

class TestHealth:
    def test_degraded(self, client: TestClient) -> None:
        with patch("src.services.gateway.app.get_db") as get_db, patch("src.services.gateway.app.get_redis") as get_redis:
            get_db.return_value.health_check = AsyncMock(return_value=True)
            get_redis.return_value.health_check = AsyncMock(return_value=False)
            response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["service"] == "logistics_backend"
        assert body["status"] == "degraded"
        assert body["dependencies"] == {"postgres": "healthy", "redis": "unhealthy"}


# =============================================================================
# WebSocket
# =============================================================================

class TestNotificationsSocket:
    def test_invalid_token_closed_with_1008(self, client: TestClient) -> None:
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect("/ws/notifications?token=wrong"):
                pass

        assert exc_info.value.code == 1008

    def test_missing_token(self, client: TestClient) -> None:
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect("/ws/notifications"):
                pass

        assert exc_info.value.code == 1008

    def test_ping_pong(self, client: TestClient) -> None:
        with client.websocket_connect(f"/ws/notifications?token={SOCKET_TOKEN}") as websocket:
            websocket.send_json({"action": "ping"})
            assert websocket.receive_json() == {"type": "pong"}

    def test_bearer_header_accepted(self, client: TestClient) -> None:
        headers = {"Authorization": f"Bearer {SOCKET_TOKEN}"}
        with client.websocket_connect("/ws/notifications", headers=headers) as websocket:
            websocket.send_text("not json")
            websocket.send_json({"action": "ping"})
            assert websocket.receive_json() == {"type": "pong"}

    def test_stats(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.get("/notifications/stats", headers=auth_headers)

        assert response.status_code == 200
        assert set(response.json()) == {"active_connections", "total_connections_ever", "total_messages_sent"}
