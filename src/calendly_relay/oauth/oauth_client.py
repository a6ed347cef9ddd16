"""
OAuth 2.0 authorization-code flow against Calendly.

Builds the authorize URL the browser is sent to and exchanges the returned
code for an access token. No state parameter or PKCE is used and no refresh
token is kept.
"""

from urllib.parse import urlencode

import httpx
from fastapi import Request

from calendly_relay.config import Settings
from calendly_relay.log_utils import LogRecord, LogEvent, info, error, debug, create_debug_request_info
from calendly_relay.models import TokenExchangeError

AUTHORIZE_PATH = "/oauth/authorize"
TOKEN_PATH = "/oauth/token"


class OAuthClient:
    """Talks to the Calendly authorization server."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self.settings = settings
        self.http_client = http_client

    @property
    def token_url(self) -> str:
        return f"{self.settings.auth_base_url.rstrip('/')}{TOKEN_PATH}"

    def build_authorize_url(self) -> str:
        """Generate the provider authorize URL for the configured client."""
        query = urlencode({
            "response_type": "code",
            "client_id": self.settings.client_id,
            "redirect_uri": self.settings.redirect_uri,
        })
        return f"{self.settings.auth_base_url.rstrip('/')}{AUTHORIZE_PATH}?{query}"

    async def exchange_code(self, code: str) -> str:
        """Exchange an authorization code for an access token."""
        payload = {
            "grant_type": "authorization_code",
            "client_id": self.settings.client_id,
            "client_secret": self.settings.client_secret,
            "code": code,
            "redirect_uri": self.settings.redirect_uri,
        }
        headers = {"Content-Type": "application/json"}

        debug(LogRecord(
            event=LogEvent.TOKEN_EXCHANGE_REQUEST.value,
            message="Exchanging authorization code",
            data=create_debug_request_info("POST", self.token_url, headers, payload)
        ))

        try:
            response = await self.http_client.post(
                self.token_url,
                headers=headers,
                json=payload,
                timeout=self.settings.upstream_timeout,
            )
            token_data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            error(LogRecord(
                event=LogEvent.TOKEN_EXCHANGE_FAILED.value,
                message=f"Token exchange failed: {e}"
            ), exc=e)
            raise TokenExchangeError("Token exchange failed") from e

        access_token = token_data.get("access_token") if isinstance(token_data, dict) else None
        if not access_token:
            error(LogRecord(
                event=LogEvent.TOKEN_EXCHANGE_FAILED.value,
                message=f"Token response carried no access_token (status {response.status_code})",
                data={"status_code": response.status_code}
            ))
            raise TokenExchangeError("Token exchange failed")

        info(LogRecord(
            event=LogEvent.TOKEN_EXCHANGE_SUCCESS.value,
            message="Authorization code exchanged for access token",
            data={"status_code": response.status_code, "token_type": token_data.get("token_type")}
        ))
        return access_token


def get_oauth_client(request: Request) -> OAuthClient:
    """FastAPI dependency returning the application's OAuth client."""
    return request.app.state.oauth_client
