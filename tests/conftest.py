"""Pytest configuration and fixtures for Calendly Relay tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from calendly_relay.config import Settings
from calendly_relay.main import create_app
from calendly_relay.session import InMemoryTokenStore

API_BASE = "https://api.calendly.com"
AUTH_BASE = "https://auth.calendly.com"
STORED_TOKEN = "stored-access-token-1234567890"


@pytest.fixture
def settings() -> Settings:
    """Settings as they would be loaded from a complete environment."""
    test_settings = Settings()
    test_settings.client_id = "test-client-id"
    test_settings.client_secret = "test-client-secret"
    test_settings.redirect_uri = "http://localhost:3000/callback"
    test_settings.port = 3000
    test_settings.project_domain = "relay-test"
    test_settings.log_color = False
    return test_settings


@pytest.fixture
def token_store() -> InMemoryTokenStore:
    return InMemoryTokenStore()


@pytest.fixture
def app(settings, token_store):
    return create_app(settings, token_store=token_store, configure_logging=False)


@pytest_asyncio.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async client talking to the app in-process."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    await app.state.http_client.aclose()


@pytest.fixture
def logged_in(token_store) -> str:
    """Put a token in the store as if /callback had succeeded."""
    token_store.set(STORED_TOKEN)
    return STORED_TOKEN
