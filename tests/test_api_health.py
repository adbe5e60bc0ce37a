"""Tests for health checks and API-wide error handling."""

from datetime import datetime
from unittest.mock import AsyncMock

from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from tcgcatalog.db.database import get_session
from tcgcatalog.main import app


def _broken_session(error: Exception):
    async def override_get_session_broken():
        mock_session = AsyncMock()
        mock_session.execute.side_effect = error
        mock_session.scalar.side_effect = error
        yield mock_session

    return override_get_session_broken


class TestHealthEndpoint:
    async def test_health_returns_ok(self, client: AsyncClient) -> None:
        """Liveness probe returns OK with a timestamp."""
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "OK"
        assert datetime.fromisoformat(data["timestamp"]).tzinfo is not None


class TestReadyEndpoint:
    async def test_ready_returns_ready(self, client: AsyncClient) -> None:
        """Readiness probe returns ready when DB is connected."""
        response = await client.get("/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready", "database": "connected"}

    async def test_ready_returns_503_on_db_failure(self) -> None:
        """Readiness probe returns 503 when DB is unavailable."""
        app.dependency_overrides[get_session] = _broken_session(
            OperationalError("SELECT 1", {}, Exception("connection refused"))
        )

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/ready")

        app.dependency_overrides.clear()

        assert response.status_code == 503
        assert response.json() == {"status": "not ready", "database": "disconnected"}


class TestErrorHandling:
    async def test_unknown_route(self, client: AsyncClient) -> None:
        response = await client.get("/pokemon")

        assert response.status_code == 404
        assert response.json() == {"error": "Endpoint not found"}

    async def test_wrong_method_is_route_miss(self, client: AsyncClient) -> None:
        """The catalog is read-only; other methods on real paths are unmatched routes."""
        post = await client.post("/sets")
        delete = await client.delete("/cards/id/base1-4")

        assert post.status_code == 404
        assert post.json() == {"error": "Endpoint not found"}
        assert delete.status_code == 404
        assert delete.json() == {"error": "Endpoint not found"}

    async def test_route_miss_distinct_from_entity_miss(self, client: AsyncClient) -> None:
        route_miss = await client.get("/sets/name/Base")
        entity_miss = await client.get("/sets/id/nope")

        assert route_miss.json() == {"error": "Endpoint not found"}
        assert entity_miss.json() == {"error": "Set not found"}

    async def test_internal_error_is_generic(self) -> None:
        """Unexpected failures return a bare 500 without internal detail."""
        app.dependency_overrides[get_session] = _broken_session(
            RuntimeError("password=hunter2 at db.internal:5432")
        )

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/cards")

        app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert "hunter2" not in response.text
