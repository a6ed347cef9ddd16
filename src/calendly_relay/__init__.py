"""
Calendly Relay.

Thin FastAPI backend that runs the Calendly OAuth authorization-code flow,
keeps one access token in memory and forwards event-type calls to the
Calendly API.
"""

__version__ = "0.1.0"
