"""
Application settings.

Defaults live in code, an optional ``config.yaml`` may override the ambient
settings, and the OAuth credentials plus the listen port always come from the
process environment (``.env`` is loaded first).
"""

import os
from pathlib import Path
from typing import Mapping, Optional

import yaml
from dotenv import load_dotenv

from calendly_relay.log_utils import LogRecord, LogEvent, warning
from calendly_relay.models import ConfigurationError

REQUIRED_ENV_VARS = ("CLIENT_ID", "CLIENT_SECRET", "REDIRECT_URI", "PORT")


class Settings:
    """Application settings with environment-specific defaults."""

    def __init__(self):
        self.app_name: str = "calendly-relay"
        self.app_version: str = "0.1.0"
        self.log_level: str = "INFO"
        self.log_file_path: str = ""
        self.log_color: bool = True
        self.host: str = "0.0.0.0"
        self.port: int = 3000

        self.api_base_url: str = "https://api.calendly.com"
        self.auth_base_url: str = "https://auth.calendly.com"
        self.dashboard_path: str = "/dashboard.html"
        # None disables the outbound timeout entirely
        self.upstream_timeout: Optional[float] = None

        self.client_id: str = ""
        self.client_secret: str = ""
        self.redirect_uri: str = ""
        self.project_domain: str = ""

    def load_from_config(self, config_path: str) -> None:
        """Load settings from the ``settings:`` block of a YAML file, if present."""
        path = Path(config_path)
        if not path.is_absolute():
            path = Path.cwd() / path
        if not path.exists():
            return

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            warning(LogRecord(
                event=LogEvent.CONFIG_LOAD_FAILED.value,
                message=f"Failed to load settings from {path}, using defaults",
            ), exc=e)
            return

        for key, value in (config.get('settings') or {}).items():
            if key in ("client_id", "client_secret", "redirect_uri"):
                # Credentials are only accepted from the environment
                continue
            if hasattr(self, key):
                if key == "log_file_path" and value and not os.path.isabs(value):
                    value = str(path.parent / value)
                if key == "log_level" and isinstance(value, str):
                    value = value.upper()
                setattr(self, key, value)

    def load_from_env(self, environ: Mapping[str, str]) -> None:
        """Apply environment variables, failing on any missing required one."""
        missing = [name for name in REQUIRED_ENV_VARS if not environ.get(name)]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        try:
            self.port = int(environ["PORT"])
        except ValueError:
            raise ConfigurationError(f"PORT must be an integer, got {environ['PORT']!r}")

        self.client_id = environ["CLIENT_ID"]
        self.client_secret = environ["CLIENT_SECRET"]
        self.redirect_uri = environ["REDIRECT_URI"]
        self.project_domain = environ.get("PROJECT_DOMAIN", "")
        if environ.get("HOST"):
            self.host = environ["HOST"]
        if environ.get("LOG_LEVEL"):
            self.log_level = environ["LOG_LEVEL"].upper()

    @classmethod
    def load(cls, config_path: str = "config.yaml",
             environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from defaults, the config file and the environment."""
        if environ is None:
            load_dotenv()
            environ = os.environ
        settings = cls()
        settings.load_from_config(config_path)
        settings.load_from_env(environ)
        return settings
