"""Entra ID query provider for client secrets nearing expiration."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from ....application.exceptions import DirectoryQueryError
from ....domain.entities import DirectoryApplication
from ....domain.exceptions import InvalidThresholdError
from .graph_client import GraphClient, GraphClientConfig

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class EntraIdClientSecretQueryProvider:
    """
    Directory query provider implementation using Microsoft Graph API.

    Implements the DirectoryQueryProvider port for Entra ID app registrations.
    """

    def __init__(
        self,
        config: GraphClientConfig | None = None,
        *,
        client: GraphClient | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """
        Initialize the provider.

        Args:
            config: Configuration for the Graph API client.
            client: Pre-built Graph client, takes precedence over ``config``.
            clock: Source of the current time used to compute remaining days.
        """
        if client is None:
            if config is None:
                msg = "Requires either a Graph client configuration or a Graph client"
                raise ValueError(msg)
            client = GraphClient(config)

        self._client = client
        self._clock = clock

    async def get_applications_with_potential_expired_secrets(
        self, threshold_days: int
    ) -> list[DirectoryApplication]:
        """
        Retrieve client secrets expiring within the threshold, expired ones included.

        Args:
            threshold_days: Maximum number of remaining valid days to include.

        Returns:
            One entry per qualifying (application, secret) pair, in directory order.

        Raises:
            InvalidThresholdError: If the threshold is negative.
            DirectoryQueryError: If retrieval fails.
        """
        if threshold_days < 0:
            msg = f"Expiration threshold must be zero or more days, got {threshold_days}"
            raise InvalidThresholdError(msg)

        try:
            applications = await self._client.get_applications()
        except Exception as e:
            msg = f"Failed to query applications from Entra ID: {e}"
            logger.exception(msg)
            raise DirectoryQueryError(msg) from e

        now = self._clock()
        results: list[DirectoryApplication] = []

        for app in applications:
            app_name = app.get("displayName", "Unknown")
            for secret in app.get("passwordCredentials") or []:
                application = self._map_secret(secret, app_name, app.get("appId"), now)
                if application and application.remaining_valid_days <= threshold_days:
                    results.append(application)

        logger.info(
            "Found %d client secrets expiring within %d days across %d applications",
            len(results),
            threshold_days,
            len(applications),
        )
        return results

    def _map_secret(
        self,
        raw: dict[str, Any],
        app_name: str,
        app_id: str | None,
        now: datetime,
    ) -> DirectoryApplication | None:
        """
        Map a raw Graph API password credential to a directory application.

        Returns:
            DirectoryApplication or None if the secret has no usable expiry date.
        """
        key_id = raw.get("keyId") or "unknown"
        expiry_str = raw.get("endDateTime")
        if not expiry_str:
            logger.warning("Secret %s in application %s has no expiry date", key_id, app_name)
            return None

        end_date_time = self._parse_datetime(expiry_str)
        if not end_date_time:
            return None

        return DirectoryApplication.from_secret(
            name=app_name,
            key_id=key_id,
            end_date_time=end_date_time,
            now=now,
            application_id=app_id,
        )

    @staticmethod
    def _parse_datetime(dt_string: str) -> datetime | None:
        """Parse ISO datetime string to datetime object."""
        try:
            # Graph returns a trailing Z and up to seven fractional digits
            dt_string = dt_string.replace("Z", "+00:00")
            dt = datetime.fromisoformat(dt_string)
            # Ensure timezone-aware
            return dt if dt.tzinfo else dt.replace(tzinfo=UTC)
        except ValueError:
            logger.warning("Failed to parse datetime: %s", dt_string)
            return None
