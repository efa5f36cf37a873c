"""Test health check and service info endpoints"""

import pytest
from fastapi import status


@pytest.mark.asyncio
async def test_health_check_healthy(client):
    """Test health check returns healthy status"""
    response = await client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "healthy"
    assert data["checks"]["api"] is True
    assert data["checks"]["store"] is True


@pytest.mark.asyncio
async def test_root_endpoint(client):
    """Test root endpoint returns app info"""
    response = await client.get("/")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["name"] == "Event Catalog"
    assert "version" in data
    assert data["status"] == "running"


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client):
    response = await client.get("/", headers={"X-Correlation-ID": "req-42"})

    assert response.headers["X-Correlation-ID"] == "req-42"
    assert "X-Process-Time" in response.headers


@pytest.mark.asyncio
async def test_correlation_id_generated_when_missing(client):
    response = await client.get("/")

    assert response.headers["X-Correlation-ID"]


@pytest.mark.asyncio
async def test_unknown_route_uses_error_body(client):
    response = await client.get("/api/nothing-here")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    body = response.json()
    assert body["status"] == 404
    assert body["error"] == "Not Found"
    assert body["path"] == "/api/nothing-here"
