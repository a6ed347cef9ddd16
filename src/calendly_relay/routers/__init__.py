"""HTTP routers, one factory per concern."""

from .demo import create_demo_router
from .event_types import create_event_types_router
from .health import create_health_router
from .oauth import create_oauth_router
from .users import create_users_router

__all__ = [
    "create_demo_router",
    "create_event_types_router",
    "create_health_router",
    "create_oauth_router",
    "create_users_router",
]
