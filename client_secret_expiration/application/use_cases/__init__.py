"""Application use cases."""

from .client_secret_expiration_job import ClientSecretExpirationJob, JobRunResult

__all__ = [
    "ClientSecretExpirationJob",
    "JobRunResult",
]
