"""Scheduled job reporting client secrets that are about to expire or have expired."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar

from ...domain.entities import DirectoryApplication
from ...domain.value_objects import ClientSecretExpirationEventType, JobRunState
from ..exceptions import ConfigurationError, DirectoryQueryError, PublishError
from ..options import ClientSecretExpirationJobOptions
from ..ports import DirectoryQueryProvider, EventPublisher

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class JobRunResult:
    """Result of a successful job run."""

    state: JobRunState
    events_published: int


class ClientSecretExpirationJob:
    """
    Job that queries Entra ID for expiring client secrets and publishes an event per secret.

    The job keeps no state between runs; every call to ``execute`` starts from
    a fresh directory query.
    """

    name: ClassVar[str] = "ClientSecretExpirationJob"

    def __init__(
        self,
        options: ClientSecretExpirationJobOptions,
        query_provider: DirectoryQueryProvider,
        event_publisher: EventPublisher,
    ) -> None:
        """
        Initialize the job.

        Args:
            options: Threshold, event URI and event factory for this job.
            query_provider: Adapter finding secrets that are about to expire.
            event_publisher: Adapter delivering events to the event pipeline.

        Raises:
            ConfigurationError: If any collaborator is missing.
        """
        if options is None:
            msg = f"Requires a registered options instance for the {self.name} background job"
            raise ConfigurationError(msg)
        if query_provider is None:
            msg = f"Requires a directory query provider for the {self.name} background job"
            raise ConfigurationError(msg)
        if event_publisher is None:
            msg = f"Requires an event publisher for the {self.name} background job"
            raise ConfigurationError(msg)

        self._options = options
        self._query_provider = query_provider
        self._publisher = event_publisher

    @property
    def options(self) -> ClientSecretExpirationJobOptions:
        """Options this job was configured with."""
        return self._options

    async def execute(self) -> JobRunResult:
        """
        Execute one run of the job.

        Returns:
            JobRunResult with the number of published events.

        Raises:
            DirectoryQueryError: If the directory query fails; nothing is published.
            PublishError: If an event cannot be published; the remaining events are skipped.
        """
        logger.debug("Executing %s", self.name)
        logger.debug("%s run state: %s", self.name, JobRunState.QUERYING)

        try:
            applications = await self._query_provider.get_applications_with_potential_expired_secrets(
                self._options.expiration_threshold_days
            )
        except DirectoryQueryError:
            logger.error("%s failed while querying applications with expiring secrets", self.name)
            raise

        logger.debug(
            "Found %d client secrets expiring within %d days",
            len(applications),
            self._options.expiration_threshold_days,
        )

        logger.debug("%s run state: %s", self.name, JobRunState.PUBLISHING)
        published = 0
        for application in applications:
            event_type = application.event_type
            self._log_application(application, event_type)

            event = self._options.create_event(application, event_type, self._options.event_uri)
            try:
                await self._publisher.publish(event)
            except PublishError as e:
                e.events_published = published
                logger.error(
                    "Aborting %s: failed to publish %s event for secret %s of application %s "
                    "after %d of %d events",
                    self.name,
                    event_type,
                    application.key_id,
                    application.name,
                    published,
                    len(applications),
                )
                raise
            published += 1

        logger.debug("Executing %s finished, published %d events", self.name, published)
        return JobRunResult(state=JobRunState.COMPLETED, events_published=published)

    @staticmethod
    def _log_application(
        application: DirectoryApplication, event_type: ClientSecretExpirationEventType
    ) -> None:
        """Log the secret with severity matching its event type."""
        telemetry_context: dict[str, Any] = {
            "key_id": application.key_id,
            "application_name": application.name,
            "remaining_valid_days": application.remaining_valid_days,
        }

        if event_type is ClientSecretExpirationEventType.CLIENT_SECRET_EXPIRED:
            logger.critical(
                "The secret %s for Entra ID application %s has expired.",
                application.key_id,
                application.name,
                extra=telemetry_context,
            )
        else:
            logger.warning(
                "The secret %s for Entra ID application %s will expire within %d days.",
                application.key_id,
                application.name,
                application.remaining_valid_days,
                extra=telemetry_context,
            )
