"""
User information routes.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request

from calendly_relay.forwarding import UpstreamClient, get_upstream_client
from calendly_relay.models import FORWARDING_ERROR_RESPONSES
from calendly_relay.session import TokenStore, get_token_store

from .common import missing_parameter_response, missing_token_response, relay


def create_users_router() -> APIRouter:
    """Create router for current-user and location lookups."""
    router = APIRouter(tags=["Users"], responses=FORWARDING_ERROR_RESPONSES)

    @router.get("/me")
    async def get_me(
        token: Optional[str] = None,
        upstream: UpstreamClient = Depends(get_upstream_client),
    ):
        """Fetch the current user with a token supplied by the caller."""
        if not token:
            return missing_parameter_response("token", "Missing token")
        return await relay(upstream.get_current_user(token), "Failed to fetch user info", relay_errors=False)

    @router.get("/me-from-store")
    async def get_me_from_store(
        request: Request,
        token_store: TokenStore = Depends(get_token_store),
        upstream: UpstreamClient = Depends(get_upstream_client),
    ):
        """Fetch the current user with the stored token."""
        token = token_store.get()
        if not token:
            return missing_token_response(request)
        return await relay(upstream.get_current_user(token), "Failed to fetch user info", relay_errors=False)

    @router.get("/locations")
    async def get_locations(
        request: Request,
        user: Optional[str] = None,
        token_store: TokenStore = Depends(get_token_store),
        upstream: UpstreamClient = Depends(get_upstream_client),
    ):
        """Fetch the locations configured for a user URI."""
        if not user:
            return missing_parameter_response("user", "Missing user URI")
        token = token_store.get()
        if not token:
            return missing_token_response(request)
        return await relay(upstream.list_locations(token, user), "Failed to fetch locations", relay_errors=False)

    return router
