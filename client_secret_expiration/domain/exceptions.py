"""Domain exceptions."""


class DomainError(Exception):
    """Base exception for domain errors."""


class InvalidThresholdError(DomainError, ValueError):
    """Raised when an expiration threshold is invalid."""
