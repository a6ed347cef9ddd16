"""
Calendly Relay - Main Application Entry Point

FastAPI application that runs the Calendly OAuth flow, holds the resulting
access token in memory and forwards a handful of event-type calls to the
Calendly API.
"""

import argparse
import sys
import time
from contextlib import asynccontextmanager
from logging.config import dictConfig
from pathlib import Path
from typing import Optional

import fastapi
import httpx
import uvicorn
from fastapi import Request
from fastapi.staticfiles import StaticFiles
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from calendly_relay.config import Settings
from calendly_relay.forwarding import UpstreamClient
from calendly_relay.log_utils import (
    LogRecord, LogEvent, ColoredConsoleFormatter, JSONFormatter, UvicornAccessFormatter,
    init_logger, debug, info, error, critical
)
from calendly_relay.models import ConfigurationError, error_response
from calendly_relay.oauth import OAuthClient
from calendly_relay.routers import (
    create_demo_router,
    create_event_types_router,
    create_health_router,
    create_oauth_router,
    create_users_router,
)
from calendly_relay.session import InMemoryTokenStore, TokenStore

PUBLIC_DIR = Path(__file__).parent / "public"

_console = Console()


def setup_logging(settings: Settings) -> dict:
    """Setup logging configuration."""
    log_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "colored_console": {"()": ColoredConsoleFormatter, "use_colors": settings.log_color},
            "json": {"()": JSONFormatter},
            "uvicorn_access": {"()": UvicornAccessFormatter},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": settings.log_level,
                "formatter": "colored_console",
                "stream": "ext://sys.stdout",
            },
            "uvicorn_access": {
                "class": "logging.StreamHandler",
                "level": "INFO",
                "formatter": "uvicorn_access",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            settings.app_name: {
                "level": settings.log_level,
                "handlers": ["console"],
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["uvicorn_access"],
                "propagate": False,
            },
        },
    }

    if settings.log_file_path:
        Path(settings.log_file_path).parent.mkdir(parents=True, exist_ok=True)
        log_config["handlers"]["file"] = {
            "class": "logging.FileHandler",
            "level": settings.log_level,
            "formatter": "json",
            "filename": settings.log_file_path,
            "mode": "a",
            "encoding": "utf-8",
        }
        log_config["loggers"][settings.app_name]["handlers"].append("file")

    dictConfig(log_config)
    return log_config


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI):
    """FastAPI lifespan event handler."""
    info(LogRecord(
        event=LogEvent.FASTAPI_STARTUP_COMPLETE.value,
        message="FastAPI application startup complete"
    ))

    yield

    await app.state.http_client.aclose()
    info(LogRecord(
        event=LogEvent.FASTAPI_SHUTDOWN.value,
        message="FastAPI application shutting down"
    ))


def create_app(
    settings: Optional[Settings] = None,
    token_store: Optional[TokenStore] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    configure_logging: bool = True,
) -> fastapi.FastAPI:
    """Create the FastAPI application with its collaborators wired into app state."""
    if settings is None:
        settings = Settings.load()

    init_logger(settings.app_name)
    if configure_logging:
        setup_logging(settings)

    app = fastapi.FastAPI(
        title="Calendly Relay",
        version=settings.app_version,
        description="OAuth relay between a browser dashboard and the Calendly API",
        lifespan=lifespan,
    )

    if http_client is None:
        http_client = httpx.AsyncClient()

    app.state.settings = settings
    app.state.http_client = http_client
    app.state.token_store = token_store if token_store is not None else InMemoryTokenStore()
    app.state.oauth_client = OAuthClient(settings, http_client)
    app.state.upstream_client = UpstreamClient(settings, http_client)

    app.include_router(create_demo_router(settings.project_domain))
    app.include_router(create_oauth_router(settings.dashboard_path))
    app.include_router(create_users_router())
    app.include_router(create_event_types_router())
    app.include_router(create_health_router(settings.app_name, settings.app_version))

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        error(LogRecord(
            event=LogEvent.UNHANDLED_EXCEPTION.value,
            message=f"Unhandled error on {request.method} {request.url.path}",
            data={"method": request.method, "path": request.url.path}
        ), exc=exc)
        return error_response(500, "Internal server error")

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        debug(LogRecord(
            event=LogEvent.HTTP_REQUEST.value,
            message=f"{request.method} {request.url.path}",
            data={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "process_time": round(process_time, 3),
            },
        ))
        return response

    # Mounted last so the routes above take precedence over static files
    app.mount("/", StaticFiles(directory=str(PUBLIC_DIR)), name="public")

    return app


def display_startup_banner(settings: Settings):
    """Display startup banner with configuration info."""
    config_text = Text.assemble(
        ("   Version       : ", "default"),
        (f"v{settings.app_version}", "bold cyan"),
        ("\n   Calendly API  : ", "default"),
        (settings.api_base_url, "default"),
        ("\n   Calendly Auth : ", "default"),
        (settings.auth_base_url, "default"),
        ("\n   Redirect URI  : ", "default"),
        (settings.redirect_uri, "default"),
        ("\n   Log Level     : ", "default"),
        (settings.log_level.upper(), "yellow"),
        ("\n   Log File      : ", "default"),
        (settings.log_file_path or "Disabled", "dim"),
        ("\n   Listening on  : ", "default"),
        (f"http://{settings.host}:{settings.port}", "bold green"),
    )

    _console.print(Panel(
        config_text,
        title="Calendly Relay Configuration",
        border_style="blue",
        expand=False,
    ))
    _console.print(Rule("Starting uvicorn server ...", style="dim blue"))


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Calendly Relay')
    parser.add_argument(
        '--config',
        type=str,
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '--port',
        type=int,
        help='Port to run the server on (overrides PORT)'
    )
    parser.add_argument(
        '--host',
        type=str,
        help='Host to bind the server to (overrides config file)'
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    try:
        settings = Settings.load(args.config)
    except ConfigurationError as e:
        critical(LogRecord(
            event=LogEvent.CONFIG_LOAD_FAILED.value,
            message=str(e)
        ), exc=e)
        _console.print(f"[bold red]Configuration error:[/bold red] {e}")
        sys.exit(1)

    if args.port:
        settings.port = args.port
    if args.host:
        settings.host = args.host

    app = create_app(settings, configure_logging=False)
    log_config = setup_logging(settings)

    display_startup_banner(settings)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_config=log_config,
    )


if __name__ == "__main__":
    main()
