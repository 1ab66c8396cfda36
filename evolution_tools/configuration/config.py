"""Configuration management for the Evolution API tool catalog."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from evolution_tools.domain.model.endpoint import ControllerType
from evolution_tools.infrastructure.evolution.http_client import EvolutionClientConfig

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Application settings."""

    # Evolution API Settings
    evolution_url: str | None = Field(default=None, alias="EVOLUTION_URL")
    evolution_api_key: str | None = Field(default=None, alias="EVOLUTION_API_KEY")

    # HTTP Client Settings (milliseconds)
    http_timeout: int = Field(default=30000, alias="HTTP_TIMEOUT")
    retry_attempts: int = Field(default=3, alias="RETRY_ATTEMPTS")
    retry_delay: int = Field(default=1000, alias="RETRY_DELAY")
    retry_backoff_factor: float = Field(default=1.0, alias="RETRY_BACKOFF_FACTOR")
    max_retry_delay: int = Field(default=30000, alias="MAX_RETRY_DELAY")
    http_logging: bool = Field(default=False, alias="HTTP_LOGGING")

    # Logging Settings
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Tool Generation Settings (comma-separated lists)
    tool_name_prefix: str = Field(default="", alias="TOOL_NAME_PREFIX")
    enabled_controllers: str = Field(default="", alias="ENABLED_CONTROLLERS")
    include_endpoints: str = Field(default="", alias="INCLUDE_ENDPOINTS")
    exclude_endpoints: str = Field(default="", alias="EXCLUDE_ENDPOINTS")

    # Server Identity
    mcp_server_name: str = Field(default="evolution-api-mcp", alias="MCP_SERVER_NAME")
    mcp_server_version: str = Field(default="1.0.0", alias="MCP_SERVER_VERSION")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str | None) -> str:
        """Normalize log level value from environment."""
        if value is None:
            return "INFO"
        normalized = str(value).strip().upper()
        if normalized in _LOG_LEVELS:
            return normalized
        raise ValueError(f"LOG_LEVEL must be one of: {', '.join(sorted(_LOG_LEVELS))}")

    @field_validator("enabled_controllers")
    @classmethod
    def validate_enabled_controllers(cls, value: str) -> str:
        """Reject controller names that do not exist."""
        known = {c.value for c in ControllerType}
        unknown = [name for name in _split_csv(value) if name.lower() not in known]
        if unknown:
            raise ValueError(
                f"Unknown controller(s) in ENABLED_CONTROLLERS: {', '.join(unknown)}. "
                f"Must be one of: {', '.join(c.value for c in ControllerType)}"
            )
        return value

    @property
    def controllers(self) -> list[ControllerType] | None:
        """Enabled controllers, or None when every controller is enabled."""
        names = _split_csv(self.enabled_controllers)
        if not names:
            return None
        return [ControllerType(name.lower()) for name in names]

    @property
    def include_endpoint_names(self) -> list[str]:
        return _split_csv(self.include_endpoints)

    @property
    def exclude_endpoint_names(self) -> list[str]:
        return _split_csv(self.exclude_endpoints)

    def to_client_config(self) -> EvolutionClientConfig:
        """Build the HTTP client configuration.

        Raises:
            ValueError: If EVOLUTION_URL or EVOLUTION_API_KEY is missing
            pydantic.ValidationError: If a value is out of range
        """
        if not self.evolution_url:
            raise ValueError("EVOLUTION_URL environment variable is required")
        if not self.evolution_api_key:
            raise ValueError("EVOLUTION_API_KEY environment variable is required")
        return EvolutionClientConfig(
            base_url=self.evolution_url,
            api_key=self.evolution_api_key,
            timeout_ms=self.http_timeout,
            retry_attempts=self.retry_attempts,
            retry_delay_ms=self.retry_delay,
            backoff_factor=self.retry_backoff_factor,
            max_retry_delay_ms=self.max_retry_delay,
            enable_logging=self.http_logging,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
