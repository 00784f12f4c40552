"""
Tests for health check endpoints.
"""

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker

pytestmark = pytest.mark.anyio


class TestHealthEndpoints:
    """Test health check API endpoints."""

    async def test_health_check(self, client):
        """Basic health check should return healthy status."""
        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "rest-api"

    async def test_detailed_health_check(self, client, test_engine, monkeypatch):
        """Detailed health check pings the database."""
        monkeypatch.setattr("rest_api.main.SessionLocal", async_sessionmaker(bind=test_engine))

        response = await client.get("/health/detailed")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"]["postgresql"]["status"] == "healthy"

    async def test_response_carries_request_id(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"
