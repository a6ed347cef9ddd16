"""Forwarding of authenticated requests to the Calendly API."""

from .upstream import (
    UpstreamClient,
    UpstreamResponse,
    coerce_active,
    get_upstream_client,
)

__all__ = ["UpstreamClient", "UpstreamResponse", "coerce_active", "get_upstream_client"]
