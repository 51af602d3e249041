"""
TurtleWatch Backend - Health & Cross-Cutting API Tests
=======================================================

What we test:
    ✅ Smoke endpoint at /test and /api/test
    ✅ /health reports database connectivity
    ✅ A broken DATABASE_URL does not stop startup
    ✅ Unknown routes and malformed bodies use the {"error": ...} envelope
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from turtlewatch.config import Settings
from turtlewatch.main import create_app


class TestHealthEndpoints:

    @pytest.mark.asyncio
    async def test_smoke(self, test_client):
        response = await test_client.get("/api/test")

        assert response.status_code == 200
        assert response.json() == {"message": "Backend is working!"}

    @pytest.mark.asyncio
    async def test_smoke_at_root(self, test_client):
        response = await test_client.get("/test")

        assert response.status_code == 200
        assert response.json() == {"message": "Backend is working!"}

    @pytest.mark.asyncio
    async def test_health_connected(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["uptime_seconds"] >= 0


class TestErrorEnvelope:

    @pytest.mark.asyncio
    async def test_unknown_route(self, test_client):
        response = await test_client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_malformed_json_is_400(self, test_client):
        response = await test_client.post(
            "/api/nests/create",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert set(response.json()) == {"error"}

    @pytest.mark.asyncio
    async def test_wrong_type_is_400(self, test_client, nest_payload):
        response = await test_client.post(
            "/api/nests/create", json=nest_payload(total_num_eggs="many")
        )

        assert response.status_code == 400
        assert "total_num_eggs" in response.json()["error"]


@pytest_asyncio.fixture
async def degraded_client():
    """Client for an app whose database engine cannot be built at all."""
    application = create_app(
        Settings(database_url="nosuchdialect://turtle@nowhere/records", log_level="WARNING")
    )
    async with application.router.lifespan_context(application):
        transport = ASGITransport(app=application)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


class TestDegradedStartup:

    @pytest.mark.asyncio
    async def test_app_still_serves(self, degraded_client):
        response = await degraded_client.get("/api/test")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_health_reports_unhealthy(self, degraded_client):
        body = (await degraded_client.get("/health")).json()

        assert body["status"] == "unhealthy"
        assert body["database"] == "disconnected"

    @pytest.mark.asyncio
    async def test_database_routes_fail_with_500(self, degraded_client):
        response = await degraded_client.get("/api/nests")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
