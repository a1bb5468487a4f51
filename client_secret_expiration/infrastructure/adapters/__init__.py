"""Infrastructure adapters - Implementations of application ports."""

from .entra_id import EntraIdClientSecretQueryProvider
from .events import EventGridPublisher, LoggingEventPublisher

__all__ = [
    "EntraIdClientSecretQueryProvider",
    "EventGridPublisher",
    "LoggingEventPublisher",
]
