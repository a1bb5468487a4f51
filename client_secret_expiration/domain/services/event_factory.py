"""Domain service building notification events for expiring client secrets."""

from __future__ import annotations

from collections.abc import Callable
from uuid import NAMESPACE_URL, uuid5

from ..entities import CloudEvent, DirectoryApplication
from ..value_objects import ClientSecretExpirationEventType

EventFactory = Callable[[DirectoryApplication, ClientSecretExpirationEventType, str], CloudEvent]


def create_client_secret_expiration_event(
    application: DirectoryApplication,
    event_type: ClientSecretExpirationEventType,
    event_uri: str,
) -> CloudEvent:
    """
    Create the CloudEvent describing an expiring or expired client secret.

    The event id is derived from its contents, so identical inputs always
    produce identical events.

    Args:
        application: Application and secret the event is about.
        event_type: Whether the secret is about to expire or has expired.
        event_uri: URI used as the event source.

    Returns:
        CloudEvent without a time; publishers stamp it on send.
    """
    if application is None:
        msg = "Requires an application to create a client secret expiration event"
        raise ValueError(msg)

    subject = f"/appregistrations/clientsecrets/{application.key_id}"
    event_id = uuid5(
        NAMESPACE_URL,
        f"{event_uri}{subject}#{event_type.value}/{application.remaining_valid_days}",
    )
    end_date_time = application.end_date_time.isoformat() if application.end_date_time else None

    return CloudEvent(
        id=str(event_id),
        source=event_uri,
        type=event_type.value,
        subject=subject,
        data={
            "name": application.name,
            "key_id": application.key_id,
            "remaining_valid_days": application.remaining_valid_days,
            "application_id": application.application_id,
            "end_date_time": end_date_time,
        },
    )
