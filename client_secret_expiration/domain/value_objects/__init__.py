"""Domain value objects - Immutable objects defined by their attributes."""

from .event_type import ClientSecretExpirationEventType
from .job_run_state import JobRunState

__all__ = [
    "ClientSecretExpirationEventType",
    "JobRunState",
]
