"""Application settings loaded from environment variables."""

import os
from dataclasses import dataclass, field
from functools import cached_property

from ...application.exceptions import ConfigurationError
from ...application.options import DEFAULT_EXPIRATION_THRESHOLD_DAYS, ClientSecretExpirationJobOptions
from ..adapters.entra_id.graph_client import GraphClientConfig
from ..adapters.events.event_grid import EventGridConfig
from ..scheduling.registration import DEFAULT_CRON_SCHEDULE


def _env_bool(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    return os.environ.get(key, str(default)).lower() in ("true", "1", "yes")


def _env_int(key: str, default: int) -> int:
    """Get integer from environment variable."""
    value = os.environ.get(key, str(default))
    try:
        return int(value)
    except ValueError as e:
        msg = f"Environment variable {key} must be an integer, got {value!r}"
        raise ConfigurationError(msg) from e


def _env_str(key: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


@dataclass
class Settings:
    """Application settings container."""

    # Azure/Entra ID
    azure_tenant_id: str = field(default_factory=lambda: _env_str("AZURE_TENANT_ID"))
    azure_client_id: str = field(default_factory=lambda: _env_str("AZURE_CLIENT_ID"))
    azure_client_secret: str = field(default_factory=lambda: _env_str("AZURE_CLIENT_SECRET"))

    # Job
    expiration_threshold_days: int = field(
        default_factory=lambda: _env_int("EXPIRATION_THRESHOLD_DAYS", DEFAULT_EXPIRATION_THRESHOLD_DAYS)
    )
    event_uri: str = field(default_factory=lambda: _env_str("EVENT_URI"))

    # Event Grid
    event_grid_topic_endpoint: str = field(default_factory=lambda: _env_str("EVENT_GRID_TOPIC_ENDPOINT"))
    event_grid_auth_key: str = field(default_factory=lambda: _env_str("EVENT_GRID_AUTH_KEY"))

    # Run configuration
    run_mode: str = field(default_factory=lambda: _env_str("RUN_MODE", "once"))
    cron_schedule: str = field(default_factory=lambda: _env_str("CRON_SCHEDULE", DEFAULT_CRON_SCHEDULE))
    log_level: str = field(default_factory=lambda: _env_str("LOG_LEVEL", "INFO"))
    dry_run: bool = field(default_factory=lambda: _env_bool("DRY_RUN"))

    # API settings
    api_enabled: bool = field(default_factory=lambda: _env_bool("API_ENABLED"))
    api_host: str = field(default_factory=lambda: _env_str("API_HOST", "0.0.0.0"))  # noqa: S104
    api_port: int = field(default_factory=lambda: _env_int("API_PORT", 8080))

    def validate(self) -> None:
        """Validate required settings."""
        missing: list[str] = []

        if not self.azure_tenant_id:
            missing.append("AZURE_TENANT_ID")
        if not self.azure_client_id:
            missing.append("AZURE_CLIENT_ID")
        if not self.azure_client_secret:
            missing.append("AZURE_CLIENT_SECRET")
        if not self.event_uri:
            missing.append("EVENT_URI")
        if not self.dry_run:
            if not self.event_grid_topic_endpoint:
                missing.append("EVENT_GRID_TOPIC_ENDPOINT")
            if not self.event_grid_auth_key:
                missing.append("EVENT_GRID_AUTH_KEY")

        if missing:
            msg = f"Missing required environment variables: {', '.join(missing)}"
            raise ConfigurationError(msg)

        # Surfaces threshold and URI problems at startup
        _ = self.job_options

    @cached_property
    def graph_config(self) -> GraphClientConfig:
        """Get Graph API client configuration."""
        return GraphClientConfig(
            tenant_id=self.azure_tenant_id,
            client_id=self.azure_client_id,
            client_secret=self.azure_client_secret,
        )

    @cached_property
    def event_grid_config(self) -> EventGridConfig:
        """Get Event Grid publisher configuration."""
        return EventGridConfig(
            topic_endpoint=self.event_grid_topic_endpoint,
            auth_key=self.event_grid_auth_key,
        )

    @cached_property
    def job_options(self) -> ClientSecretExpirationJobOptions:
        """Get client secret expiration job options."""
        return ClientSecretExpirationJobOptions(
            event_uri=self.event_uri,
            expiration_threshold_days=self.expiration_threshold_days,
        )


def load_settings() -> Settings:
    """Load and validate settings from environment."""
    settings = Settings()
    settings.validate()
    return settings
