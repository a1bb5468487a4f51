"""Fake adapters and Graph payload builders shared by the tests."""

from __future__ import annotations

import threading
from datetime import UTC, datetime, timedelta
from typing import Any

from client_secret_expiration.application.exceptions import PublishError
from client_secret_expiration.domain.entities import CloudEvent, DirectoryApplication
from client_secret_expiration.infrastructure.adapters.entra_id import GraphClient

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)
EVENT_URI = "https://contoso.example/client-secret-expiration"


def graph_timestamp(days_from_now: int) -> str:
    """Format an expiry the way Graph returns it, relative to FIXED_NOW."""
    return (FIXED_NOW + timedelta(days=days_from_now)).isoformat().replace("+00:00", "Z")


def graph_application(name: str, *secrets: tuple[str, int], app_id: str | None = None) -> dict[str, Any]:
    """Build a Graph application with (keyId, days until expiry) password credentials."""
    return {
        "id": f"object-{name}",
        "appId": app_id or f"app-{name}",
        "displayName": name,
        "passwordCredentials": [
            {"keyId": key_id, "displayName": f"{key_id} secret", "endDateTime": graph_timestamp(days)}
            for key_id, days in secrets
        ],
    }


class StubTokenGraphClient(GraphClient):
    """Graph client that skips MSAL token acquisition."""

    async def _acquire_token(self) -> str:
        return "test-token"


class StubMsalApp:
    """Stands in for msal.ConfidentialClientApplication with a canned token response."""

    def __init__(self, result: dict[str, Any]) -> None:
        self.result = result
        self.calls: list[list[str]] = []
        self.thread_ids: list[int] = []

    def acquire_token_for_client(self, scopes: list[str]) -> dict[str, Any]:
        self.calls.append(scopes)
        self.thread_ids.append(threading.get_ident())
        return self.result


class FakeQueryProvider:
    """Directory query provider returning canned applications."""

    def __init__(
        self,
        applications: list[DirectoryApplication] | None = None,
        *,
        error: Exception | None = None,
    ) -> None:
        self.applications = applications or []
        self.error = error
        self.thresholds: list[int] = []

    async def get_applications_with_potential_expired_secrets(
        self, threshold_days: int
    ) -> list[DirectoryApplication]:
        self.thresholds.append(threshold_days)
        if self.error:
            raise self.error
        return list(self.applications)


class RecordingPublisher:
    """Event publisher that records events and can fail on the n-th publish."""

    def __init__(self, *, fail_on: int | None = None) -> None:
        self.events: list[CloudEvent] = []
        self.attempts = 0
        self.fail_on = fail_on

    async def publish(self, event: CloudEvent) -> None:
        self.attempts += 1
        if self.fail_on is not None and self.attempts == self.fail_on:
            msg = f"Event Grid rejected event {event.id}"
            raise PublishError(msg)
        self.events.append(event)
