#!/usr/bin/env python3
"""
Client Secret Expiration Job

Composition root and application entry point.
Wires together all layers following hexagonal architecture principles.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import TYPE_CHECKING

from . import __version__
from .application.exceptions import ConfigurationError
from .infrastructure.adapters import (
    EntraIdClientSecretQueryProvider,
    EventGridPublisher,
    LoggingEventPublisher,
)
from .infrastructure.config import Settings, load_settings
from .infrastructure.scheduling import JobScheduler, add_client_secret_expiration_job

if TYPE_CHECKING:
    from .application.ports import EventPublisher
    from .application.use_cases import ClientSecretExpirationJob

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


class ApplicationContainer:
    """
    Dependency injection container.

    Responsible for creating and wiring all application components.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize container with settings."""
        self._settings = settings

    def create_query_provider(self) -> EntraIdClientSecretQueryProvider:
        """Create the directory query provider adapter."""
        return EntraIdClientSecretQueryProvider(self._settings.graph_config)

    def create_event_publisher(self) -> EventPublisher:
        """Create the event publisher adapter, or a logging one in dry run mode."""
        if self._settings.dry_run:
            logger.info("DRY RUN: Events will be logged instead of published")
            return LoggingEventPublisher()
        return EventGridPublisher(self._settings.event_grid_config)

    def create_scheduler(self) -> tuple[JobScheduler, ClientSecretExpirationJob]:
        """Create the scheduler with the client secret expiration job registered."""
        scheduler = JobScheduler()
        job = add_client_secret_expiration_job(
            scheduler,
            options=self._settings.job_options,
            query_provider=self.create_query_provider(),
            event_publisher=self.create_event_publisher(),
            cron_schedule=self._settings.cron_schedule,
        )
        return scheduler, job


class Application:
    """
    Main application orchestrator.

    Handles run modes (single execution, scheduled, or API) and lifecycle.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize application with settings."""
        self._settings = settings
        self._scheduler, self._job = ApplicationContainer(settings).create_scheduler()

    async def run_once(self) -> bool:
        """Execute a single run; True when it completed."""
        record = await self._scheduler.run_job(self._job.name)
        return record.succeeded

    async def run_scheduled(self) -> None:
        """Run in scheduled mode with cron expression."""
        logger.info("Starting scheduled mode with cron: %s", self._settings.cron_schedule)
        await self._scheduler.run_forever(run_on_startup=True)

    def run_api(self) -> None:
        """Run in API server mode."""
        import uvicorn

        from .infrastructure.adapters.api import create_app

        logger.info(
            "Starting API server on %s:%d",
            self._settings.api_host,
            self._settings.api_port,
        )

        app = create_app(
            scheduler=self._scheduler,
            job_name=self._job.name,
            version=__version__,
        )

        uvicorn.run(
            app,
            host=self._settings.api_host,
            port=self._settings.api_port,
            log_level=self._settings.log_level.lower(),
        )

    async def run(self) -> int:
        """
        Run the application based on configured mode.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        match self._settings.run_mode.lower():
            case "once":
                logger.info("Running in single-execution mode")
                return 0 if await self.run_once() else 1

            case "scheduled":
                await self.run_scheduled()
                return 0

            case _:
                logger.error(
                    "Invalid RUN_MODE: %s (use 'once', 'scheduled', or set API_ENABLED=true)",
                    self._settings.run_mode,
                )
                return 1


async def async_main(settings: Settings) -> int:
    """Async entry point."""
    try:
        return await Application(settings).run()
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return 1
    except Exception:
        logger.exception("Unexpected error")
        return 1


def main() -> None:
    """Main entry point."""
    logger.info("Client Secret Expiration Job starting...")

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level.upper())

    # uvicorn owns the event loop in API mode
    if settings.api_enabled:
        try:
            Application(settings).run_api()
        except ConfigurationError as e:
            logger.error("Configuration error: %s", e)
            sys.exit(1)
        sys.exit(0)

    try:
        exit_code = asyncio.run(async_main(settings))
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        exit_code = 0
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
