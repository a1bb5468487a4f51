"""Cron-driven scheduler hosting recurring background jobs."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Protocol

from croniter import croniter

from ...application.exceptions import ConfigurationError
from ...domain.value_objects import JobRunState

logger = logging.getLogger(__name__)


class ScheduledJob(Protocol):
    """A job the scheduler can run on every tick."""

    name: str

    async def execute(self) -> Any:
        """Run the job once."""
        ...


@dataclass(slots=True)
class UnobservedJobExceptionEvent:
    """Raised to the unobserved exception handler when a job run fails."""

    job_name: str
    exception: BaseException
    observed: bool = False

    def set_observed(self) -> None:
        """Mark the exception as handled so it does not propagate further."""
        self.observed = True


UnobservedExceptionHandler = Callable[[UnobservedJobExceptionEvent], None]


@dataclass(frozen=True, slots=True)
class JobRunRecord:
    """Outcome of a single job run as seen by the scheduler."""

    job_name: str
    started_at: datetime
    finished_at: datetime
    state: JobRunState
    events_published: int = 0
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        """Check if the run completed."""
        return self.state is JobRunState.COMPLETED


@dataclass(slots=True)
class _ScheduledEntry:
    job: ScheduledJob
    cron_schedule: str
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    last_run: JobRunRecord | None = None


def _utc_now() -> datetime:
    return datetime.now(UTC)


class JobScheduler:
    """
    Runs registered jobs on their cron schedules.

    Runs of the same job never overlap. Failed runs are reported to
    ``unobserved_exception_handler``; an exception the handler does not mark
    as observed is re-raised to the caller.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utc_now) -> None:
        """Initialize an empty scheduler."""
        self._jobs: dict[str, _ScheduledEntry] = {}
        self._clock = clock
        self._stopping = asyncio.Event()
        self.unobserved_exception_handler: UnobservedExceptionHandler | None = None

    @property
    def job_names(self) -> list[str]:
        """Names of all registered jobs."""
        return list(self._jobs)

    def add_job(self, job: ScheduledJob, cron_schedule: str) -> None:
        """
        Register a job to run on a cron schedule.

        Raises:
            ConfigurationError: If the schedule is invalid or the job name is taken.
        """
        if not croniter.is_valid(cron_schedule):
            msg = f"Invalid cron schedule for job {job.name}: {cron_schedule!r}"
            raise ConfigurationError(msg)
        if job.name in self._jobs:
            msg = f"A job named {job.name} is already registered"
            raise ConfigurationError(msg)

        self._jobs[job.name] = _ScheduledEntry(job=job, cron_schedule=cron_schedule)
        logger.info("Registered job %s with schedule %s", job.name, cron_schedule)

    def last_run(self, name: str) -> JobRunRecord | None:
        """Most recent run of the named job, if any."""
        return self._get_entry(name).last_run

    def next_run_time(self, name: str, base: datetime | None = None) -> datetime:
        """Next occurrence of the named job's schedule after ``base``."""
        entry = self._get_entry(name)
        next_run = croniter(entry.cron_schedule, base or self._clock()).get_next(datetime)
        # croniter returns naive datetimes for naive bases
        if next_run.tzinfo is None:
            next_run = next_run.replace(tzinfo=UTC)
        return next_run

    async def run_job(self, name: str) -> JobRunRecord:
        """
        Run the named job once, waiting for any in-progress run to finish first.

        Returns:
            JobRunRecord describing the run.

        Raises:
            Exception: The job's exception, when no handler marks it observed.
            asyncio.CancelledError: If the run is cancelled.
        """
        entry = self._get_entry(name)

        async with entry.lock:
            started_at = self._clock()
            logger.info("Running job %s", name)
            try:
                result = await entry.job.execute()
            except asyncio.CancelledError:
                entry.last_run = self._record(name, started_at, JobRunState.FAILED, error="cancelled")
                logger.warning("Job %s was cancelled", name)
                raise
            except Exception as e:
                entry.last_run = self._record(
                    name,
                    started_at,
                    JobRunState.FAILED,
                    events_published=getattr(e, "events_published", 0),
                    error=str(e),
                )
                if not self._notify_unobserved(name, e):
                    raise
                return entry.last_run

            entry.last_run = self._record(
                name,
                started_at,
                JobRunState.COMPLETED,
                events_published=getattr(result, "events_published", 0),
            )
            logger.info("Job %s completed", name)
            return entry.last_run

    async def run_forever(self, *, run_on_startup: bool = True) -> None:
        """
        Run every registered job on its schedule until ``stop`` is called.

        Args:
            run_on_startup: Run each job once immediately before waiting for its schedule.
        """
        if not self._jobs:
            msg = "No jobs registered with the scheduler"
            raise ConfigurationError(msg)

        tasks = [
            asyncio.create_task(self._run_loop(name, run_on_startup=run_on_startup), name=name)
            for name in self._jobs
        ]
        try:
            await asyncio.gather(*tasks)
        finally:
            for task in tasks:
                task.cancel()
        logger.info("Scheduler stopped")

    def stop(self) -> None:
        """Ask all job loops to finish after their current run."""
        logger.info("Stopping scheduler...")
        self._stopping.set()

    async def _run_loop(self, name: str, *, run_on_startup: bool) -> None:
        if run_on_startup and not self._stopping.is_set():
            logger.info("Running initial %s on startup...", name)
            await self.run_job(name)

        while not self._stopping.is_set():
            next_run = self.next_run_time(name)
            sleep_seconds = (next_run - self._clock()).total_seconds()

            if sleep_seconds > 0:
                logger.info("Next run of %s scheduled for %s", name, next_run.isoformat())
                if await self._wait_for_stop(sleep_seconds):
                    break

            await self.run_job(name)

    async def _wait_for_stop(self, timeout: float) -> bool:
        """Wait up to ``timeout`` seconds; True when the scheduler is stopping."""
        try:
            await asyncio.wait_for(self._stopping.wait(), timeout=timeout)
        except TimeoutError:
            return False
        return True

    def _notify_unobserved(self, name: str, exception: Exception) -> bool:
        """Hand a failed run to the handler; True if it was marked observed."""
        if self.unobserved_exception_handler is None:
            return False

        event = UnobservedJobExceptionEvent(job_name=name, exception=exception)
        self.unobserved_exception_handler(event)
        return event.observed

    def _record(
        self,
        name: str,
        started_at: datetime,
        state: JobRunState,
        *,
        events_published: int = 0,
        error: str | None = None,
    ) -> JobRunRecord:
        return JobRunRecord(
            job_name=name,
            started_at=started_at,
            finished_at=self._clock(),
            state=state,
            events_published=events_published,
            error=error,
        )

    def _get_entry(self, name: str) -> _ScheduledEntry:
        try:
            return self._jobs[name]
        except KeyError:
            msg = f"No job named {name} is registered"
            raise KeyError(msg) from None
