"""Tests for event publisher adapters."""

from __future__ import annotations

import asyncio
import json
import logging

import httpx
import pytest

from client_secret_expiration.application.exceptions import PublishError
from client_secret_expiration.domain.entities import CloudEvent, DirectoryApplication
from client_secret_expiration.domain.services import create_client_secret_expiration_event
from client_secret_expiration.domain.value_objects import ClientSecretExpirationEventType
from client_secret_expiration.infrastructure.adapters.events import (
    EventGridConfig,
    EventGridPublisher,
    LoggingEventPublisher,
)
from tests.fixtures.fakes import EVENT_URI, FIXED_NOW

TOPIC_ENDPOINT = "https://contoso-topic.westeurope-1.eventgrid.azure.net/api/events"


@pytest.fixture
def expired_event(expired_application: DirectoryApplication) -> CloudEvent:
    """Event for the expired Contoso-API secret."""
    return create_client_secret_expiration_event(
        expired_application, ClientSecretExpirationEventType.CLIENT_SECRET_EXPIRED, EVENT_URI
    )


class TestEventGridConfig:
    """Tests for EventGridConfig."""

    def test_default_config_not_configured(self) -> None:
        """Default config has no endpoint or key."""
        assert EventGridConfig().is_configured is False

    def test_configured_with_endpoint_and_key(self) -> None:
        """Endpoint and key are both required."""
        assert EventGridConfig(topic_endpoint=TOPIC_ENDPOINT, auth_key="key").is_configured is True
        assert EventGridConfig(topic_endpoint=TOPIC_ENDPOINT).is_configured is False


class TestEventGridPublisher:
    """Tests for EventGridPublisher."""

    def test_publish_posts_cloud_event_batch(self, expired_event: CloudEvent) -> None:
        """Events are posted as a single-item CloudEvents batch with the SAS key."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200)

        publisher = EventGridPublisher(
            EventGridConfig(topic_endpoint=TOPIC_ENDPOINT, auth_key="sas-key"),
            transport=httpx.MockTransport(handler),
        )

        asyncio.run(publisher.publish(expired_event))

        [request] = requests
        assert request.method == "POST"
        assert str(request.url) == TOPIC_ENDPOINT
        assert request.headers["aeg-sas-key"] == "sas-key"
        assert request.headers["Content-Type"].startswith("application/cloudevents-batch+json")

        [body] = json.loads(request.content)
        assert body["id"] == expired_event.id
        assert body["type"] == "ClientSecretExpired"
        assert body["source"] == EVENT_URI
        assert body["subject"] == "/appregistrations/clientsecrets/abc-123"
        assert body["specversion"] == "1.0"
        assert body["data"]["key_id"] == "abc-123"
        assert "time" in body

    def test_publish_keeps_existing_time(self, expired_event: CloudEvent) -> None:
        """Events that already carry a time are sent unchanged."""
        bodies: list[list[dict]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200)

        publisher = EventGridPublisher(
            EventGridConfig(topic_endpoint=TOPIC_ENDPOINT, auth_key="sas-key"),
            transport=httpx.MockTransport(handler),
        )

        asyncio.run(publisher.publish(expired_event.with_time(FIXED_NOW)))

        assert bodies[0][0]["time"] == FIXED_NOW.isoformat()

    def test_rejected_event_raises_publish_error(self, expired_event: CloudEvent) -> None:
        """Non-success responses raise PublishError."""
        publisher = EventGridPublisher(
            EventGridConfig(topic_endpoint=TOPIC_ENDPOINT, auth_key="wrong-key"),
            transport=httpx.MockTransport(lambda request: httpx.Response(401)),
        )

        with pytest.raises(PublishError, match="ClientSecretExpired"):
            asyncio.run(publisher.publish(expired_event))

    def test_unreachable_topic_raises_publish_error(self, expired_event: CloudEvent) -> None:
        """Transport failures raise PublishError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("Timed out", request=request)

        publisher = EventGridPublisher(
            EventGridConfig(topic_endpoint=TOPIC_ENDPOINT, auth_key="sas-key"),
            transport=httpx.MockTransport(handler),
        )

        with pytest.raises(PublishError):
            asyncio.run(publisher.publish(expired_event))


class TestLoggingEventPublisher:
    """Tests for LoggingEventPublisher."""

    def test_publish_logs_and_counts(self, expired_event: CloudEvent, caplog: pytest.LogCaptureFixture) -> None:
        """Dry-run publishing logs the serialized event."""
        publisher = LoggingEventPublisher()

        with caplog.at_level(logging.INFO):
            asyncio.run(publisher.publish(expired_event))
            asyncio.run(publisher.publish(expired_event))

        assert publisher.published_count == 2
        assert sum("DRY RUN" in r.getMessage() for r in caplog.records) == 2
        assert expired_event.id in caplog.records[0].getMessage()
