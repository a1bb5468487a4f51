"""Options for the client secret expiration job."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from ..domain.services import EventFactory, create_client_secret_expiration_event
from .exceptions import ConfigurationError

DEFAULT_EXPIRATION_THRESHOLD_DAYS = 30


@dataclass(frozen=True, slots=True)
class ClientSecretExpirationJobOptions:
    """Immutable configuration for one client secret expiration job."""

    event_uri: str
    expiration_threshold_days: int = DEFAULT_EXPIRATION_THRESHOLD_DAYS
    create_event: EventFactory = field(default=create_client_secret_expiration_event)

    def __post_init__(self) -> None:
        """Validate options at configuration time."""
        if self.expiration_threshold_days < 0:
            msg = (
                "Expiration threshold must be zero or more days, "
                f"got {self.expiration_threshold_days}"
            )
            raise ConfigurationError(msg)

        if self.create_event is None:
            msg = "Requires an event factory to create client secret expiration events"
            raise ConfigurationError(msg)

        if not self.event_uri:
            msg = "Requires an event URI as source for client secret expiration events"
            raise ConfigurationError(msg)

        try:
            url = httpx.URL(self.event_uri)
        except httpx.InvalidURL as e:
            msg = f"Event URI is not a well-formed URI: {self.event_uri}"
            raise ConfigurationError(msg) from e

        if not url.is_absolute_url:
            msg = f"Event URI must be an absolute URI: {self.event_uri}"
            raise ConfigurationError(msg)
