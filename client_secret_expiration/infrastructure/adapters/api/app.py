"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import FastAPI, HTTPException, status
from fastapi.responses import JSONResponse

from .models import ErrorResponse, HealthResponse, RunResponse

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from ...scheduling import JobRunRecord, JobScheduler

logger = logging.getLogger(__name__)


def _record_to_response(record: JobRunRecord) -> RunResponse:
    """Convert a scheduler run record to an API response."""
    return RunResponse(
        job_name=record.job_name,
        state=record.state.value,
        started_at=record.started_at,
        finished_at=record.finished_at,
        events_published=record.events_published,
        error=record.error,
        success=record.succeeded,
    )


def create_app(
    scheduler: JobScheduler,
    job_name: str,
    version: str = "1.0.0",
) -> FastAPI:
    """
    Create FastAPI application.

    Args:
        scheduler: Scheduler hosting the job, so on-demand runs share its run lock and error handling.
        job_name: Name of the job exposed by this API.
        version: Application version string.

    Returns:
        Configured FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler."""
        logger.info("API server starting...")
        yield
        logger.info("API server shutting down...")

    app = FastAPI(
        title="Client Secret Expiration Job API",
        description="Trigger and inspect runs of the job that reports Entra ID client secrets "
        "which are about to expire or have expired.",
        version=version,
        lifespan=lifespan,
        responses={
            500: {"model": ErrorResponse, "description": "Internal server error"},
        },
    )

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
        description="Check if the service is healthy and running.",
    )
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            version=version,
            timestamp=datetime.now(UTC),
        )

    @app.get(
        "/api/v1/runs/last",
        response_model=RunResponse,
        tags=["Runs"],
        summary="Get latest run",
        description="Get the outcome of the most recent job run.",
        responses={
            404: {"model": ErrorResponse, "description": "No run available"},
        },
    )
    async def get_last_run() -> RunResponse:
        record = scheduler.last_run(job_name)
        if record is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No run available. Trigger a run first using POST /api/v1/run",
            )
        return _record_to_response(record)

    @app.post(
        "/api/v1/run",
        response_model=RunResponse,
        tags=["Runs"],
        summary="Trigger job run",
        description="Run the job once, waiting for any scheduled run in progress to finish first.",
        responses={
            500: {"model": ErrorResponse, "description": "Run failed"},
        },
    )
    async def trigger_run() -> RunResponse:
        try:
            logger.info("API: Triggering %s...", job_name)
            record = await scheduler.run_job(job_name)
        except Exception as e:
            logger.exception("API: %s run failed", job_name)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Job run failed: {e}",
            ) from e

        return _record_to_response(record)

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc: Exception) -> JSONResponse:  # noqa: ARG001
        """Handle uncaught exceptions."""
        logger.exception("Unhandled exception in API")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "detail": str(exc)},
        )

    return app
