"""Directory application entity representing one expiring client secret."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Self

from ..value_objects import ClientSecretExpirationEventType


@dataclass(frozen=True, slots=True)
class DirectoryApplication:
    """An Entra ID application paired with one of its client secrets.

    One instance exists per (application, secret) pair, so an application
    with two expiring secrets yields two instances.
    """

    name: str
    key_id: str
    remaining_valid_days: int
    application_id: str | None = None
    end_date_time: datetime | None = None

    @property
    def is_expired(self) -> bool:
        """Check if the secret has already expired."""
        return self.remaining_valid_days < 0

    @property
    def event_type(self) -> ClientSecretExpirationEventType:
        """Event type this secret should be reported under."""
        return ClientSecretExpirationEventType.classify(self.remaining_valid_days)

    @classmethod
    def from_secret(
        cls,
        *,
        name: str,
        key_id: str,
        end_date_time: datetime,
        now: datetime,
        application_id: str | None = None,
    ) -> Self:
        """Factory method computing remaining valid days relative to ``now``."""
        expiry_aware = end_date_time if end_date_time.tzinfo else end_date_time.replace(tzinfo=UTC)
        return cls(
            name=name,
            key_id=key_id,
            remaining_valid_days=(expiry_aware - now).days,
            application_id=application_id,
            end_date_time=expiry_aware,
        )
