"""
Event type routes: create, list, update and availability schedules.

Bodies are forwarded as loose JSON objects; the only field-level change is
the strict boolean coercion of ``active`` on creation.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from calendly_relay.forwarding import UpstreamClient, coerce_active, get_upstream_client
from calendly_relay.models import FORWARDING_ERROR_RESPONSES
from calendly_relay.session import TokenStore, get_token_store

from .common import missing_token_response, read_json_object, relay


def create_event_types_router() -> APIRouter:
    """Create router for event type management."""
    router = APIRouter(tags=["Event Types"], responses=FORWARDING_ERROR_RESPONSES)

    @router.post("/create-event-type")
    async def create_event_type(
        request: Request,
        token_store: TokenStore = Depends(get_token_store),
        upstream: UpstreamClient = Depends(get_upstream_client),
    ):
        token = token_store.get()
        if not token:
            return missing_token_response(request)

        body = await read_json_object(request)
        if isinstance(body, JSONResponse):
            return body

        payload = {**body, "active": coerce_active(body.get("active"))}
        return await relay(upstream.create_event_type(token, payload), "Failed to create event type")

    @router.get("/list-event-types")
    async def list_event_types(
        request: Request,
        token_store: TokenStore = Depends(get_token_store),
        upstream: UpstreamClient = Depends(get_upstream_client),
    ):
        """List event types, passing the whole query string through."""
        token = token_store.get()
        if not token:
            return missing_token_response(request)

        params = request.query_params.multi_items()
        return await relay(upstream.list_event_types(token, params), "Failed to list event types", relay_errors=False)

    @router.patch("/update-event-type/{uuid}")
    async def update_event_type(
        uuid: str,
        request: Request,
        token_store: TokenStore = Depends(get_token_store),
        upstream: UpstreamClient = Depends(get_upstream_client),
    ):
        token = token_store.get()
        if not token:
            return missing_token_response(request)

        body = await read_json_object(request)
        if isinstance(body, JSONResponse):
            return body

        return await relay(upstream.update_event_type(token, uuid, body), "Failed to update event type")

    @router.patch("/update-event-availability")
    async def update_event_availability(
        request: Request,
        token_store: TokenStore = Depends(get_token_store),
        upstream: UpstreamClient = Depends(get_upstream_client),
    ):
        token = token_store.get()
        if not token:
            return missing_token_response(request)

        body = await read_json_object(request)
        if isinstance(body, JSONResponse):
            return body

        return await relay(upstream.update_availability(token, body), "Failed to update availability")

    return router
