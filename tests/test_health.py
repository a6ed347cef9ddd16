"""
Tests for the health check route.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_before_login(async_client: AsyncClient):
    response = await async_client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "calendly-relay"
    assert data["token_stored"] is False


@pytest.mark.asyncio
async def test_health_after_login_does_not_leak_token(async_client: AsyncClient, logged_in):
    response = await async_client.get("/health")

    assert response.json()["token_stored"] is True
    assert logged_in not in response.text
