"""Application ports - Interfaces for external adapters."""

from .directory_query import DirectoryQueryProvider
from .event_publisher import EventPublisher

__all__ = [
    "DirectoryQueryProvider",
    "EventPublisher",
]
