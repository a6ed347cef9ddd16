"""
Tests for settings loading from config file and environment.
"""

import pytest

from calendly_relay.config import Settings
from calendly_relay.models import ConfigurationError

FULL_ENV = {
    "CLIENT_ID": "cid",
    "CLIENT_SECRET": "secret",
    "REDIRECT_URI": "http://localhost:3000/callback",
    "PORT": "3000",
}


def test_load_from_complete_environment(tmp_path):
    settings = Settings.load(str(tmp_path / "missing.yaml"), environ=FULL_ENV)

    assert settings.client_id == "cid"
    assert settings.client_secret == "secret"
    assert settings.redirect_uri == "http://localhost:3000/callback"
    assert settings.port == 3000
    assert settings.api_base_url == "https://api.calendly.com"
    assert settings.auth_base_url == "https://auth.calendly.com"
    assert settings.upstream_timeout is None


@pytest.mark.parametrize("missing", ["CLIENT_ID", "CLIENT_SECRET", "REDIRECT_URI", "PORT"])
def test_each_required_variable_is_enforced(tmp_path, missing):
    environ = {k: v for k, v in FULL_ENV.items() if k != missing}

    with pytest.raises(ConfigurationError) as exc_info:
        Settings.load(str(tmp_path / "missing.yaml"), environ=environ)

    assert missing in str(exc_info.value)


def test_all_missing_variables_are_reported(tmp_path):
    with pytest.raises(ConfigurationError) as exc_info:
        Settings.load(str(tmp_path / "missing.yaml"), environ={})

    message = str(exc_info.value)
    for name in FULL_ENV:
        assert name in message


def test_port_must_be_integer(tmp_path):
    environ = dict(FULL_ENV, PORT="eighty")

    with pytest.raises(ConfigurationError):
        Settings.load(str(tmp_path / "missing.yaml"), environ=environ)


def test_yaml_settings_override_defaults(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "settings:\n"
        "  log_level: DEBUG\n"
        "  log_file_path: logs/relay.jsonl\n"
        "  api_base_url: http://calendly.local\n"
        "  upstream_timeout: 12.5\n"
        "  client_secret: from-file\n",
        encoding="utf-8",
    )

    settings = Settings.load(str(config_file), environ=FULL_ENV)

    assert settings.log_level == "DEBUG"
    assert settings.api_base_url == "http://calendly.local"
    assert settings.upstream_timeout == 12.5
    assert settings.log_file_path == str(tmp_path / "logs/relay.jsonl")
    # Credentials only come from the environment
    assert settings.client_secret == "secret"


def test_optional_environment_values(tmp_path):
    environ = dict(FULL_ENV, PROJECT_DOMAIN="my-relay", HOST="127.0.0.1", LOG_LEVEL="debug")

    settings = Settings.load(str(tmp_path / "missing.yaml"), environ=environ)

    assert settings.project_domain == "my-relay"
    assert settings.host == "127.0.0.1"
    assert settings.log_level == "DEBUG"


def test_yaml_log_level_is_normalised(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("settings:\n  log_level: info\n", encoding="utf-8")

    settings = Settings.load(str(config_file), environ=FULL_ENV)

    assert settings.log_level == "INFO"
