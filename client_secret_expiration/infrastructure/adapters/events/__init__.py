"""Event publisher adapter implementations."""

from .event_grid import EventGridConfig, EventGridPublisher
from .logging_publisher import LoggingEventPublisher

__all__ = [
    "EventGridConfig",
    "EventGridPublisher",
    "LoggingEventPublisher",
]
