"""Domain entities - Objects with identity and lifecycle."""

from .cloud_event import CloudEvent
from .directory_application import DirectoryApplication

__all__ = [
    "CloudEvent",
    "DirectoryApplication",
]
