"""Scheduled job reporting Entra ID client secrets that are about to expire or have expired."""

__version__ = "1.0.0"
