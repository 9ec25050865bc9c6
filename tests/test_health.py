"""
Tests for health check endpoints.
"""
from httpx import AsyncClient


async def test_root_endpoint(async_client: AsyncClient):
    """Test the root endpoint returns API info."""
    response = await async_client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Watch Store API"
    assert "version" in data
    assert data["status"] == "running"


async def test_health_check(async_client: AsyncClient):
    """Test the basic health check endpoint."""
    response = await async_client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "timestamp" in data


async def test_liveness_probe(async_client: AsyncClient):
    """Test the liveness probe endpoint."""
    response = await async_client.get("/health/live")

    assert response.status_code == 200
    assert response.json()["status"] == "alive"


async def test_readiness_probe(async_client: AsyncClient):
    """Test the readiness probe reports a connected database."""
    response = await async_client.get("/health/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"]["database"] == "connected"


async def test_request_id_is_echoed(async_client: AsyncClient):
    response = await async_client.get("/health", headers={"X-Request-ID": "abc-123"})

    assert response.headers["x-request-id"] == "abc-123"


async def test_request_id_is_generated(async_client: AsyncClient):
    response = await async_client.get("/health")

    assert response.headers["x-request-id"]
