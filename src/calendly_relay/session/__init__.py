"""Session holder for the single Calendly access token."""

from .token_store import TokenStore, InMemoryTokenStore, get_token_store

__all__ = ["TokenStore", "InMemoryTokenStore", "get_token_store"]
