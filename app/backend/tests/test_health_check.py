"""Tests for health check endpoint."""

from unittest.mock import patch

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_check_basic(client: AsyncClient):
    """Test basic health check without any checks."""
    response = await client.get("/health_check")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["environment"] == "test"


@pytest.mark.asyncio
async def test_health_check_with_db(client: AsyncClient):
    """Test health check with database connectivity check."""
    response = await client.get("/health_check?check_db=true")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "connected"


@pytest.mark.asyncio
async def test_health_check_db_unavailable(client: AsyncClient):
    """Database failures are reported instead of raised."""
    with patch(
        "src.main.get_async_sessionmaker", side_effect=RuntimeError("connection refused")
    ):
        response = await client.get("/health_check?check_db=true")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["database"] == "disconnected"
    assert "connection refused" in data["error"]
