"""
Single-token session holder.

Keeps one Calendly access token for the lifetime of the process. A new login
silently replaces the previous token; nothing is persisted or revoked.
"""

from typing import Optional

from fastapi import Request

from calendly_relay.log_utils import LogRecord, LogEvent, info


class TokenStore:
    """Interface for holding the current access token."""

    def set(self, token: str) -> None:
        raise NotImplementedError

    def get(self) -> Optional[str]:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def has_token(self) -> bool:
        return bool(self.get())


class InMemoryTokenStore(TokenStore):
    """Process-local store. Last write wins, no locking."""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def set(self, token: str) -> None:
        replaced = self._token is not None and self._token != token
        self._token = token
        info(LogRecord(
            event=(LogEvent.TOKEN_REPLACED if replaced else LogEvent.TOKEN_STORED).value,
            message="Access token replaced" if replaced else "Access token stored",
        ))

    def get(self) -> Optional[str]:
        return self._token

    def clear(self) -> None:
        self._token = None
        info(LogRecord(
            event=LogEvent.TOKEN_CLEARED.value,
            message="Access token cleared"
        ))


def get_token_store(request: Request) -> TokenStore:
    """FastAPI dependency returning the application's token store."""
    return request.app.state.token_store
