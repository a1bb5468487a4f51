"""API adapter for HTTP endpoints."""

from .app import create_app
from .models import ErrorResponse, HealthResponse, RunResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "RunResponse",
    "create_app",
]
