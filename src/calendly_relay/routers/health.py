"""
Health check route.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from calendly_relay.session import TokenStore, get_token_store


def create_health_router(app_name: str, app_version: str) -> APIRouter:
    """Create health router."""
    router = APIRouter(tags=["Health"])

    @router.get("/health")
    async def health_check(token_store: TokenStore = Depends(get_token_store)) -> JSONResponse:
        """Liveness plus whether a login has happened yet."""
        return JSONResponse(
            content={
                "status": "healthy",
                "service": app_name,
                "version": app_version,
                "token_stored": token_store.has_token(),
            }
        )

    return router
