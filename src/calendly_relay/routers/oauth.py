"""
OAuth-related routes: sending the browser to Calendly and handling its callback.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from calendly_relay.log_utils import LogRecord, LogEvent, info, warning
from calendly_relay.models import TokenExchangeError, error_response
from calendly_relay.oauth import OAuthClient, get_oauth_client
from calendly_relay.session import TokenStore, get_token_store


def create_oauth_router(dashboard_path: str = "/dashboard.html") -> APIRouter:
    """Create the router for the authorization-code flow."""
    router = APIRouter(tags=["OAuth"])

    @router.get("/auth")
    async def start_authorization(oauth_client: OAuthClient = Depends(get_oauth_client)):
        """Redirect the browser to the Calendly authorize page."""
        authorize_url = oauth_client.build_authorize_url()
        info(LogRecord(
            event=LogEvent.OAUTH_REDIRECT.value,
            message="Redirecting to Calendly authorize endpoint"
        ))
        return RedirectResponse(authorize_url)

    @router.get("/callback")
    async def oauth_callback(
        code: Optional[str] = None,
        oauth_client: OAuthClient = Depends(get_oauth_client),
        token_store: TokenStore = Depends(get_token_store),
    ):
        """Exchange the authorization code, store the token and go to the dashboard."""
        if not code:
            warning(LogRecord(
                event=LogEvent.OAUTH_CODE_MISSING.value,
                message="OAuth callback reached without an authorization code"
            ))
            return error_response(400, "Missing authorization code")

        try:
            access_token = await oauth_client.exchange_code(code)
        except TokenExchangeError:
            return error_response(500, "Token exchange failed")

        token_store.set(access_token)
        return RedirectResponse(url=dashboard_path, status_code=302)

    return router
