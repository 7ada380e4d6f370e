"""Tests for health check endpoints."""

import pytest
from httpx import AsyncClient

from taskboard import __version__


pytestmark = pytest.mark.integration


async def test_liveness_endpoint(client: AsyncClient):
    """Liveness needs no tenant and no database."""
    response = await client.get("/health/live")

    assert response.status_code == 200
    assert response.json()["status"] == "alive"


async def test_readiness_endpoint(client: AsyncClient):
    response = await client.get("/health/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"]["database"] == "ok"


async def test_info_endpoint(client: AsyncClient):
    response = await client.get("/info")

    assert response.status_code == 200
    data = response.json()
    assert data["app"] == "Taskboard"
    assert data["version"] == __version__
    assert "environment" in data


async def test_responses_carry_request_id(client: AsyncClient):
    response = await client.get("/health/live", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
