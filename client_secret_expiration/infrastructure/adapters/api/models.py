"""API response models."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "unhealthy"]
    version: str
    timestamp: datetime


class RunResponse(BaseModel):
    """Summary of a single job run."""

    job_name: str
    state: str = Field(description="Final run state: completed or failed")
    started_at: datetime
    finished_at: datetime
    events_published: int = Field(description="Events published during the run")
    error: str | None = Field(default=None, description="Failure reason for failed runs")
    success: bool


class ErrorResponse(BaseModel):
    """Error response."""

    error: str
    detail: str | None = None
