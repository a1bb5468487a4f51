"""Port for event publishing - driven/secondary port."""

from typing import Protocol

from ...domain.entities import CloudEvent


class EventPublisher(Protocol):
    """
    Port for publishing notification events.

    This is a driven (secondary) port that defines how the application
    hands events to a downstream event pipeline.
    """

    async def publish(self, event: CloudEvent) -> None:
        """
        Publish a single event and wait for the sink to acknowledge it.

        Args:
            event: The event to publish.

        Raises:
            PublishError: If the sink rejects the event or cannot be reached.
        """
        ...
