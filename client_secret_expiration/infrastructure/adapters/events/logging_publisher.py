"""Dry-run publisher that logs events instead of sending them."""

from __future__ import annotations

import json
import logging

from ....domain.entities import CloudEvent

logger = logging.getLogger(__name__)


class LoggingEventPublisher:
    """Log every event and keep a count; nothing leaves the process."""

    def __init__(self) -> None:
        self.published_count = 0

    async def publish(self, event: CloudEvent) -> None:
        """Log the event in its serialized form."""
        self.published_count += 1
        logger.info("DRY RUN: Would publish event %s", json.dumps(event.to_dict(), default=str))
