"""Port for querying the identity directory - driven/secondary port."""

from typing import Protocol

from ...domain.entities import DirectoryApplication


class DirectoryQueryProvider(Protocol):
    """
    Port for finding applications with expiring client secrets.

    This is a driven (secondary) port that defines how the application
    retrieves secret expiration information from the identity directory.
    """

    async def get_applications_with_potential_expired_secrets(
        self, threshold_days: int
    ) -> list[DirectoryApplication]:
        """
        Retrieve secrets expiring within the threshold, expired ones included.

        Args:
            threshold_days: Maximum number of remaining valid days to include.

        Returns:
            One entry per qualifying (application, secret) pair.

        Raises:
            DirectoryQueryError: If the directory cannot be queried.
        """
        ...
