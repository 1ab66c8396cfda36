"""Tests for Settings."""

import pytest
from pydantic import ValidationError

from evolution_tools.configuration.config import Settings, get_settings
from evolution_tools.domain.model.endpoint import ControllerType

ENV_VARS = [
    "EVOLUTION_URL",
    "EVOLUTION_API_KEY",
    "HTTP_TIMEOUT",
    "RETRY_ATTEMPTS",
    "RETRY_DELAY",
    "RETRY_BACKOFF_FACTOR",
    "MAX_RETRY_DELAY",
    "HTTP_LOGGING",
    "LOG_LEVEL",
    "TOOL_NAME_PREFIX",
    "ENABLED_CONTROLLERS",
    "INCLUDE_ENDPOINTS",
    "EXCLUDE_ENDPOINTS",
    "MCP_SERVER_NAME",
    "MCP_SERVER_VERSION",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate settings from the host environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self) -> None:
        """Should apply defaults when nothing is set."""
        settings = Settings(_env_file=None)

        assert settings.evolution_url is None
        assert settings.http_timeout == 30000
        assert settings.retry_attempts == 3
        assert settings.retry_delay == 1000
        assert settings.log_level == "INFO"
        assert settings.mcp_server_name == "evolution-api-mcp"
        assert settings.mcp_server_version == "1.0.0"
        assert settings.controllers is None
        assert settings.include_endpoint_names == []

    def test_reads_environment(self, monkeypatch) -> None:
        """Should read values from environment variables."""
        monkeypatch.setenv("EVOLUTION_URL", "https://evo.example.com")
        monkeypatch.setenv("EVOLUTION_API_KEY", "secret")
        monkeypatch.setenv("RETRY_ATTEMPTS", "5")
        monkeypatch.setenv("HTTP_LOGGING", "true")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("ENABLED_CONTROLLERS", "message, Chat")
        monkeypatch.setenv("EXCLUDE_ENDPOINTS", "delete-instance,leave-group")

        settings = Settings(_env_file=None)

        assert settings.retry_attempts == 5
        assert settings.http_logging is True
        assert settings.log_level == "DEBUG"
        assert settings.controllers == [ControllerType.MESSAGE, ControllerType.CHAT]
        assert settings.exclude_endpoint_names == ["delete-instance", "leave-group"]

    def test_unknown_controller_rejected(self, monkeypatch) -> None:
        monkeypatch.setenv("ENABLED_CONTROLLERS", "message,billing")

        with pytest.raises(ValidationError, match="billing"):
            Settings(_env_file=None)

    def test_bad_log_level_rejected(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_to_client_config(self, monkeypatch) -> None:
        """Should map settings onto the client config."""
        monkeypatch.setenv("EVOLUTION_URL", "https://evo.example.com/")
        monkeypatch.setenv("EVOLUTION_API_KEY", "secret")
        monkeypatch.setenv("HTTP_TIMEOUT", "5000")
        monkeypatch.setenv("RETRY_BACKOFF_FACTOR", "2")

        config = Settings(_env_file=None).to_client_config()

        assert config.base_url == "https://evo.example.com"
        assert config.api_key == "secret"
        assert config.timeout_ms == 5000
        assert config.backoff_factor == 2.0

    def test_to_client_config_requires_url(self) -> None:
        with pytest.raises(ValueError, match="EVOLUTION_URL"):
            Settings(_env_file=None).to_client_config()

    def test_to_client_config_range_checked(self, monkeypatch) -> None:
        """Should surface out-of-range values as validation errors."""
        monkeypatch.setenv("EVOLUTION_URL", "https://evo.example.com")
        monkeypatch.setenv("EVOLUTION_API_KEY", "secret")
        monkeypatch.setenv("RETRY_ATTEMPTS", "42")

        with pytest.raises(ValidationError):
            Settings(_env_file=None).to_client_config()

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()
