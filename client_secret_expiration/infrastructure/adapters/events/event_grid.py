"""Azure Event Grid publisher for CloudEvents."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import ClassVar

import httpx

from ....application.exceptions import PublishError
from ....domain.entities import CloudEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EventGridConfig:
    """Event Grid topic configuration."""

    topic_endpoint: str = ""
    auth_key: str = ""
    timeout: float = 30.0

    @property
    def is_configured(self) -> bool:
        """Check if both endpoint and key are set."""
        return bool(self.topic_endpoint) and bool(self.auth_key)


class EventGridPublisher:
    """Publish CloudEvents to an Event Grid topic, one event per request."""

    CONTENT_TYPE: ClassVar[str] = "application/cloudevents-batch+json; charset=utf-8"
    AUTH_HEADER: ClassVar[str] = "aeg-sas-key"

    def __init__(
        self,
        config: EventGridConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Event Grid publisher."""
        self._config = config
        self._transport = transport

    async def publish(self, event: CloudEvent) -> None:
        """
        Publish a single event and wait for Event Grid to accept it.

        Args:
            event: The event to publish; stamped with the current time if it has none.

        Raises:
            PublishError: If Event Grid rejects the event or cannot be reached.
        """
        if event.time is None:
            event = event.with_time(datetime.now(UTC))

        try:
            async with httpx.AsyncClient(timeout=self._config.timeout, transport=self._transport) as client:
                response = await client.post(
                    self._config.topic_endpoint,
                    json=[event.to_dict()],
                    headers={
                        "Content-Type": self.CONTENT_TYPE,
                        self.AUTH_HEADER: self._config.auth_key,
                    },
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            msg = f"Failed to publish {event.type} event {event.id} to Event Grid: {e}"
            raise PublishError(msg) from e

        logger.info("Published %s event %s for %s", event.type, event.id, event.subject)
