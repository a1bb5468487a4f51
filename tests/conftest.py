"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from datetime import timedelta

import pytest

from client_secret_expiration.application.exceptions import DirectoryQueryError
from client_secret_expiration.application.options import ClientSecretExpirationJobOptions
from client_secret_expiration.domain.entities import DirectoryApplication
from tests.fixtures.fakes import EVENT_URI, FIXED_NOW, FakeQueryProvider, RecordingPublisher


@pytest.fixture
def job_options() -> ClientSecretExpirationJobOptions:
    """Options with the default 30 day threshold."""
    return ClientSecretExpirationJobOptions(event_uri=EVENT_URI, expiration_threshold_days=30)


@pytest.fixture
def expired_application() -> DirectoryApplication:
    """An application whose secret expired five days ago."""
    return DirectoryApplication(
        name="Contoso-API",
        key_id="abc-123",
        remaining_valid_days=-5,
        application_id="app-contoso-api",
        end_date_time=FIXED_NOW - timedelta(days=5),
    )


@pytest.fixture
def expiring_application() -> DirectoryApplication:
    """An application whose secret expires in ten days."""
    return DirectoryApplication(
        name="Contoso-Web",
        key_id="def-456",
        remaining_valid_days=10,
        application_id="app-contoso-web",
        end_date_time=FIXED_NOW + timedelta(days=10),
    )


@pytest.fixture
def recording_publisher() -> RecordingPublisher:
    """Publisher recording every event."""
    return RecordingPublisher()


@pytest.fixture
def failing_query_provider() -> FakeQueryProvider:
    """Query provider that cannot reach the directory."""
    return FakeQueryProvider(error=DirectoryQueryError("Failed to query applications from Entra ID: 401"))
