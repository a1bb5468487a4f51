"""Scheduling host for recurring background jobs."""

from .registration import add_client_secret_expiration_job, log_unobserved_job_exception
from .scheduler import JobRunRecord, JobScheduler, UnobservedJobExceptionEvent

__all__ = [
    "JobRunRecord",
    "JobScheduler",
    "UnobservedJobExceptionEvent",
    "add_client_secret_expiration_job",
    "log_unobserved_job_exception",
]
