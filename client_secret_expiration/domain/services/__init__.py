"""Domain services - Stateless operations on domain objects."""

from .event_factory import EventFactory, create_client_secret_expiration_event

__all__ = [
    "EventFactory",
    "create_client_secret_expiration_event",
]
