"""
Routes for the color-picker demo page.
"""

from typing import Optional

from fastapi import APIRouter, Form
from fastapi.responses import HTMLResponse

from calendly_relay.demo import load_seo, lookup_color, random_color, render_index
from calendly_relay.log_utils import LogRecord, LogEvent, debug


def create_demo_router(project_domain: str = "") -> APIRouter:
    """Create router for the demo page at ``/``."""
    router = APIRouter(tags=["Demo"], include_in_schema=False)
    seo = load_seo(project_domain)

    @router.get("/", response_class=HTMLResponse)
    async def index(randomize: Optional[str] = None):
        if randomize:
            return HTMLResponse(render_index(seo, color=random_color()))
        return HTMLResponse(render_index(seo))

    @router.post("/", response_class=HTMLResponse)
    async def submit_color(color: Optional[str] = Form(None)):
        if not color:
            return HTMLResponse(render_index(seo))

        hex_value = lookup_color(color)
        if hex_value:
            return HTMLResponse(render_index(seo, color=hex_value))

        debug(LogRecord(
            event=LogEvent.DEMO_COLOR_UNKNOWN.value,
            message=f"Unknown color submitted: {color}"
        ))
        return HTMLResponse(render_index(seo, color_error=color))

    return router
