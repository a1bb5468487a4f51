"""Application layer exceptions."""


class ApplicationError(Exception):
    """Base exception for application errors."""


class ConfigurationError(ApplicationError, ValueError):
    """Raised when required configuration is missing or invalid."""


class DirectoryQueryError(ApplicationError):
    """Raised when the identity directory cannot be queried."""


class PublishError(ApplicationError):
    """
    Raised when an event cannot be delivered to the event sink.

    ``events_published`` counts the events of the same run that were delivered
    before the failure. They are not rolled back.
    """

    def __init__(self, message: str, *, events_published: int = 0) -> None:
        super().__init__(message)
        self.events_published = events_published
