"""Tests for DirectoryApplication entity."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from client_secret_expiration.domain.entities import DirectoryApplication
from client_secret_expiration.domain.value_objects import ClientSecretExpirationEventType
from tests.fixtures.fakes import FIXED_NOW


class TestDirectoryApplication:
    """Tests for DirectoryApplication entity."""

    def test_expired_application(self, expired_application: DirectoryApplication) -> None:
        """Negative remaining days mark the secret as expired."""
        assert expired_application.is_expired is True
        assert expired_application.event_type is ClientSecretExpirationEventType.CLIENT_SECRET_EXPIRED

    def test_expiring_application(self, expiring_application: DirectoryApplication) -> None:
        """Positive remaining days mark the secret as about to expire."""
        assert expiring_application.is_expired is False
        assert expiring_application.event_type is ClientSecretExpirationEventType.CLIENT_SECRET_ABOUT_TO_EXPIRE

    def test_from_secret_computes_remaining_days(self) -> None:
        """Remaining days are whole days between now and the expiry."""
        application = DirectoryApplication.from_secret(
            name="Contoso-Web",
            key_id="def-456",
            end_date_time=FIXED_NOW + timedelta(days=10, hours=6),
            now=FIXED_NOW,
            application_id="app-contoso-web",
        )
        assert application.remaining_valid_days == 10
        assert application.application_id == "app-contoso-web"

    def test_from_secret_partial_day_past_expiry_is_expired(self) -> None:
        """A secret that expired an hour ago already counts as expired."""
        application = DirectoryApplication.from_secret(
            name="Contoso-Web",
            key_id="def-456",
            end_date_time=FIXED_NOW - timedelta(hours=1),
            now=FIXED_NOW,
        )
        assert application.remaining_valid_days == -1
        assert application.is_expired is True

    def test_from_secret_with_naive_datetime(self) -> None:
        """Naive expiry dates are treated as UTC."""
        naive_expiry = datetime(2024, 6, 11, 12, 0)  # noqa: DTZ001
        application = DirectoryApplication.from_secret(
            name="Contoso-Web",
            key_id="def-456",
            end_date_time=naive_expiry,
            now=FIXED_NOW,
        )
        assert application.remaining_valid_days == 10
        assert application.end_date_time == naive_expiry.replace(tzinfo=UTC)

    def test_is_frozen(self, expiring_application: DirectoryApplication) -> None:
        """Directory applications should be immutable."""
        with pytest.raises(AttributeError):
            expiring_application.remaining_valid_days = 0  # type: ignore[misc]
