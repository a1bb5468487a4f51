"""Client secret expiration event type value object."""

from enum import StrEnum


class ClientSecretExpirationEventType(StrEnum):
    """Type of event emitted for a client secret nearing or past expiry."""

    CLIENT_SECRET_ABOUT_TO_EXPIRE = "ClientSecretAboutToExpire"
    CLIENT_SECRET_EXPIRED = "ClientSecretExpired"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def classify(cls, remaining_valid_days: int) -> "ClientSecretExpirationEventType":
        """Classify a secret by the sign of its remaining valid days."""
        if remaining_valid_days < 0:
            return cls.CLIENT_SECRET_EXPIRED
        return cls.CLIENT_SECRET_ABOUT_TO_EXPIRE
