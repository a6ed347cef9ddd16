"""Error types and the JSON error body shared by every route."""

from typing import Any, Dict

from fastapi.responses import JSONResponse
from pydantic import BaseModel


NO_TOKEN_MESSAGE = "No token stored yet"


class ErrorResponse(BaseModel):
    error: str


class RelayError(Exception):
    """Base class for failures raised inside the relay."""


class ConfigurationError(RelayError):
    """Required configuration is missing or malformed."""


class TokenExchangeError(RelayError):
    """The authorization code could not be exchanged for an access token."""


class UpstreamError(RelayError):
    """The remote API could not be reached or answered with a non-JSON body."""


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the ``{"error": message}`` response used for every relay-side failure."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


# OpenAPI documentation for the error statuses a forwarding route can produce
FORWARDING_ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Missing or invalid parameter"},
    401: {"model": ErrorResponse, "description": "No token stored yet"},
    500: {"model": ErrorResponse, "description": "Remote API unreachable or unreadable"},
}
