"""
OAuth module.

Handles the Calendly authorization-code flow:
- Authorize URL generation
- Authorization code exchange
"""

from .oauth_client import OAuthClient, AUTHORIZE_PATH, TOKEN_PATH, get_oauth_client

__all__ = ["OAuthClient", "AUTHORIZE_PATH", "TOKEN_PATH", "get_oauth_client"]
