"""Response models and error types."""

from .errors import (
    NO_TOKEN_MESSAGE,
    FORWARDING_ERROR_RESPONSES,
    ErrorResponse,
    RelayError,
    ConfigurationError,
    TokenExchangeError,
    UpstreamError,
    error_response,
)

__all__ = [
    "NO_TOKEN_MESSAGE",
    "FORWARDING_ERROR_RESPONSES",
    "ErrorResponse",
    "RelayError",
    "ConfigurationError",
    "TokenExchangeError",
    "UpstreamError",
    "error_response",
]
