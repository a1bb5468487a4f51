"""Registration of the client secret expiration job with a scheduler."""

from __future__ import annotations

import logging

from ...application.exceptions import ConfigurationError
from ...application.options import ClientSecretExpirationJobOptions
from ...application.ports import DirectoryQueryProvider, EventPublisher
from ...application.use_cases import ClientSecretExpirationJob
from .scheduler import JobScheduler, UnobservedJobExceptionEvent

logger = logging.getLogger(__name__)

DEFAULT_CRON_SCHEDULE = "0 8 * * *"


def log_unobserved_job_exception(event: UnobservedJobExceptionEvent) -> None:
    """Log a failed job run at critical severity and mark it observed."""
    logger.critical("Unhandled exception in job %s", event.job_name, exc_info=event.exception)
    event.set_observed()


def add_client_secret_expiration_job(
    scheduler: JobScheduler,
    *,
    options: ClientSecretExpirationJobOptions,
    query_provider: DirectoryQueryProvider,
    event_publisher: EventPublisher,
    cron_schedule: str = DEFAULT_CRON_SCHEDULE,
) -> ClientSecretExpirationJob:
    """
    Add the client secret expiration job to the scheduler.

    Failed runs are logged at critical severity instead of crashing the host.

    Returns:
        The registered job.

    Raises:
        ConfigurationError: If the scheduler or job configuration is missing or invalid.
    """
    if scheduler is None:
        msg = "Requires a scheduler to register the client secret expiration job"
        raise ConfigurationError(msg)

    job = ClientSecretExpirationJob(options, query_provider, event_publisher)
    scheduler.add_job(job, cron_schedule)
    scheduler.unobserved_exception_handler = log_unobserved_job_exception
    return job
