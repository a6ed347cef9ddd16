"""
Calendly API forwarder.

Each call attaches a bearer token, sends exactly one request to the remote
API and hands back its status and parsed JSON body. Transport failures and
unreadable bodies surface as ``UpstreamError``; nothing is retried.
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import httpx
from fastapi import Request

from calendly_relay.config import Settings
from calendly_relay.log_utils import (
    LogRecord, LogEvent, debug, info, warning, error, create_debug_request_info
)
from calendly_relay.models import UpstreamError

QueryParams = Union[Dict[str, str], Sequence[Tuple[str, str]]]


@dataclass
class UpstreamResponse:
    status_code: int
    body: Any

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class UpstreamClient:
    """Sends authenticated requests to the Calendly REST API."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self.settings = settings
        self.http_client = http_client

    def build_url(self, path: str) -> str:
        return f"{self.settings.api_base_url.rstrip('/')}/{path.lstrip('/')}"

    @staticmethod
    def build_headers(token: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    async def request(
        self,
        method: str,
        path: str,
        token: str,
        params: Optional[QueryParams] = None,
        json: Optional[Any] = None,
    ) -> UpstreamResponse:
        url = self.build_url(path)
        headers = self.build_headers(token)
        query: Optional[List[Tuple[str, str]]] = None
        if params is not None:
            query = list(params.items()) if isinstance(params, dict) else list(params)

        debug(LogRecord(
            event=LogEvent.UPSTREAM_REQUEST.value,
            message=f"{method} {path}",
            data=create_debug_request_info(method, url, headers, json)
        ))

        start_time = time.time()
        try:
            response = await self.http_client.request(
                method,
                url,
                headers=headers,
                params=query,
                json=json,
                timeout=self.settings.upstream_timeout,
            )
        except httpx.HTTPError as e:
            error(LogRecord(
                event=LogEvent.UPSTREAM_FAILURE.value,
                message=f"{method} {path} failed: {e}",
                data={"method": method, "upstream_path": path}
            ), exc=e)
            raise UpstreamError(f"Request to {path} failed") from e

        try:
            body = response.json()
        except ValueError as e:
            error(LogRecord(
                event=LogEvent.UPSTREAM_FAILURE.value,
                message=f"{method} {path} returned a non-JSON body",
                data={"method": method, "upstream_path": path, "status_code": response.status_code}
            ), exc=e)
            raise UpstreamError(f"Unreadable response from {path}") from e

        result = UpstreamResponse(status_code=response.status_code, body=body)
        record = LogRecord(
            event=LogEvent.UPSTREAM_RESPONSE.value,
            message=f"{method} {path} -> {response.status_code}",
            data={
                "method": method,
                "upstream_path": path,
                "status_code": response.status_code,
                "duration": round(time.time() - start_time, 3),
            }
        )
        if result.is_success:
            info(record)
        else:
            record.event = LogEvent.UPSTREAM_REJECTED.value
            warning(record)
        return result

    async def get_current_user(self, token: str) -> UpstreamResponse:
        return await self.request("GET", "/users/me", token)

    async def list_locations(self, token: str, user: str) -> UpstreamResponse:
        return await self.request("GET", "/locations", token, params={"user": user})

    async def create_event_type(self, token: str, payload: Dict[str, Any]) -> UpstreamResponse:
        return await self.request("POST", "/event_types", token, json=payload)

    async def list_event_types(self, token: str, params: QueryParams) -> UpstreamResponse:
        return await self.request("GET", "/event_types", token, params=params)

    async def update_event_type(self, token: str, uuid: str, payload: Dict[str, Any]) -> UpstreamResponse:
        return await self.request("PATCH", f"/event_types/{uuid}", token, json=payload)

    async def update_availability(self, token: str, payload: Dict[str, Any]) -> UpstreamResponse:
        return await self.request("PATCH", "/event_type_availability_schedules", token, json=payload)


def coerce_active(value: Any) -> bool:
    """Strict boolean for the ``active`` flag: only ``True`` or ``"true"`` count."""
    return value is True or value == "true"


def get_upstream_client(request: Request) -> UpstreamClient:
    """FastAPI dependency returning the application's upstream client."""
    return request.app.state.upstream_client
