"""
Tests for the OAuth authorization-code flow routes.
"""

import json
from urllib.parse import parse_qs, urlparse

import httpx
import pytest
import respx
from httpx import AsyncClient, Response

from conftest import API_BASE, AUTH_BASE

TOKEN_URL = f"{AUTH_BASE}/oauth/token"


class TestAuthorizeRedirect:

    @pytest.mark.asyncio
    async def test_auth_redirects_to_calendly(self, async_client: AsyncClient):
        response = await async_client.get("/auth")

        assert response.status_code == 307
        location = urlparse(response.headers["location"])
        assert f"{location.scheme}://{location.netloc}" == AUTH_BASE
        assert location.path == "/oauth/authorize"
        assert parse_qs(location.query) == {
            "response_type": ["code"],
            "client_id": ["test-client-id"],
            "redirect_uri": ["http://localhost:3000/callback"],
        }


class TestCallback:

    @pytest.mark.asyncio
    async def test_successful_exchange_stores_token_and_redirects(self, async_client: AsyncClient, token_store):
        with respx.mock:
            route = respx.post(TOKEN_URL).mock(
                return_value=Response(200, json={
                    "access_token": "fresh-token",
                    "token_type": "Bearer",
                    "refresh_token": "ignored",
                })
            )

            response = await async_client.get("/callback", params={"code": "auth-code-1"})

        assert response.status_code == 302
        assert response.headers["location"] == "/dashboard.html"
        assert token_store.get() == "fresh-token"

        sent = json.loads(route.calls.last.request.content)
        assert sent == {
            "grant_type": "authorization_code",
            "client_id": "test-client-id",
            "client_secret": "test-client-secret",
            "code": "auth-code-1",
            "redirect_uri": "http://localhost:3000/callback",
        }
        assert route.calls.last.request.headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    async def test_exchanged_token_is_used_for_forwarding(self, async_client: AsyncClient):
        with respx.mock:
            respx.post(TOKEN_URL).mock(return_value=Response(200, json={"access_token": "fresh-token"}))
            me_route = respx.get(f"{API_BASE}/users/me").mock(
                return_value=Response(200, json={"resource": {"uri": "https://api.calendly.com/users/ABC"}})
            )

            await async_client.get("/callback", params={"code": "auth-code-1"})
            response = await async_client.get("/me-from-store")

        assert response.status_code == 200
        assert me_route.calls.last.request.headers["authorization"] == "Bearer fresh-token"

    @pytest.mark.asyncio
    async def test_new_login_replaces_previous_token(self, async_client: AsyncClient, token_store, logged_in):
        with respx.mock:
            respx.post(TOKEN_URL).mock(return_value=Response(200, json={"access_token": "second-token"}))

            response = await async_client.get("/callback", params={"code": "auth-code-2"})

        assert response.status_code == 302
        assert token_store.get() == "second-token"

    @pytest.mark.asyncio
    async def test_network_failure_returns_500(self, async_client: AsyncClient, token_store):
        with respx.mock:
            respx.post(TOKEN_URL).mock(side_effect=httpx.ConnectError("connection refused"))

            response = await async_client.get("/callback", params={"code": "auth-code-1"})

        assert response.status_code == 500
        assert response.json() == {"error": "Token exchange failed"}
        assert token_store.get() is None

    @pytest.mark.asyncio
    async def test_unparseable_token_response_returns_500(self, async_client: AsyncClient, token_store):
        with respx.mock:
            respx.post(TOKEN_URL).mock(return_value=Response(502, text="<html>Bad gateway</html>"))

            response = await async_client.get("/callback", params={"code": "auth-code-1"})

        assert response.status_code == 500
        assert response.json() == {"error": "Token exchange failed"}
        assert token_store.get() is None

    @pytest.mark.asyncio
    async def test_rejected_code_keeps_existing_token(self, async_client: AsyncClient, token_store, logged_in):
        with respx.mock:
            respx.post(TOKEN_URL).mock(
                return_value=Response(400, json={"error": "invalid_grant", "error_description": "expired"})
            )

            response = await async_client.get("/callback", params={"code": "stale"})

        assert response.status_code == 500
        assert response.json() == {"error": "Token exchange failed"}
        assert token_store.get() == logged_in

    @pytest.mark.asyncio
    async def test_missing_code_returns_400_without_calling_provider(self, async_client: AsyncClient):
        with respx.mock(assert_all_called=False):
            route = respx.post(TOKEN_URL).mock(return_value=Response(200, json={"access_token": "x"}))

            response = await async_client.get("/callback")

        assert response.status_code == 400
        assert response.json() == {"error": "Missing authorization code"}
        assert not route.called
