"""Microsoft Graph API client for Entra ID."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, ClassVar

import httpx
import msal

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GraphClientConfig:
    """Configuration for Microsoft Graph API client."""

    tenant_id: str
    client_id: str
    client_secret: str
    timeout: float = 30.0


class GraphClient:
    """
    Async client for Microsoft Graph API.

    Handles authentication and paginated requests to the Graph API.
    """

    GRAPH_BASE_URL: ClassVar[str] = "https://graph.microsoft.com/v1.0"
    AUTHORITY_BASE: ClassVar[str] = "https://login.microsoftonline.com"
    SCOPE: ClassVar[list[str]] = ["https://graph.microsoft.com/.default"]
    APPLICATION_FIELDS: ClassVar[str] = "id,appId,displayName,passwordCredentials"

    def __init__(
        self,
        config: GraphClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the Graph client.

        Args:
            config: Tenant, client credentials and request timeout.
            transport: Optional httpx transport, used to substitute the network in tests.
        """
        self._config = config
        self._transport = transport
        self._access_token: str | None = None
        self._token_expiry: datetime | None = None
        self._msal_app: msal.ConfidentialClientApplication | None = None

    def _get_msal_app(self) -> msal.ConfidentialClientApplication:
        """Get or create MSAL application instance."""
        if self._msal_app is None:
            authority = f"{self.AUTHORITY_BASE}/{self._config.tenant_id}"
            self._msal_app = msal.ConfidentialClientApplication(
                client_id=self._config.client_id,
                client_credential=self._config.client_secret,
                authority=authority,
            )
        return self._msal_app

    def _token_is_valid(self) -> bool:
        """Check if the cached token can still be used."""
        return bool(self._access_token and self._token_expiry and datetime.now(UTC) < self._token_expiry)

    async def _acquire_token(self) -> str:
        """
        Acquire an access token using the client credentials flow.

        MSAL is synchronous and performs authority discovery over the network,
        so it runs in a worker thread to keep the event loop responsive.

        Raises:
            RuntimeError: If the identity provider refuses the credentials.
        """
        if self._token_is_valid():
            return self._access_token

        app = await asyncio.to_thread(self._get_msal_app)
        result = await asyncio.to_thread(app.acquire_token_for_client, scopes=self.SCOPE)

        if "access_token" not in result:
            error = result.get("error_description", result.get("error", "Unknown error"))
            msg = f"Failed to acquire access token for tenant {self._config.tenant_id}: {error}"
            raise RuntimeError(msg)

        self._access_token = result["access_token"]
        expires_in = result.get("expires_in", 3600)
        # Refresh 5 minutes before expiry
        self._token_expiry = datetime.now(UTC) + timedelta(seconds=expires_in - 300)
        logger.debug("Token retrieved for tenant %s", self._config.tenant_id)

        return self._access_token

    async def get_applications(self) -> list[dict[str, Any]]:
        """
        Retrieve all application registrations with their client secrets.

        Returns:
            List of application dictionaries from Graph API.
        """
        logger.info("Fetching application registrations from Entra ID...")
        applications = await self._get_all_pages(f"/applications?$select={self.APPLICATION_FIELDS}")
        logger.info("Found %d application registrations", len(applications))
        return applications

    async def _get_all_pages(self, endpoint: str) -> list[dict[str, Any]]:
        """
        Retrieve all pages from a paginated Graph API endpoint.

        Args:
            endpoint: The API endpoint path.

        Returns:
            Combined list of all results across pages.
        """
        results: list[dict[str, Any]] = []
        url: str | None = endpoint
        pages = 0

        async with httpx.AsyncClient(timeout=self._config.timeout, transport=self._transport) as client:
            while url:
                token = await self._acquire_token()
                headers = {
                    "Authorization": f"Bearer {token}",
                    "Content-Type": "application/json",
                }

                # Handle both relative and absolute URLs
                full_url = url if url.startswith("http") else f"{self.GRAPH_BASE_URL}{url}"

                response = await client.get(full_url, headers=headers)
                response.raise_for_status()
                data = response.json()

                pages += 1
                results.extend(data.get("value", []))
                url = data.get("@odata.nextLink")

        logger.debug("Retrieved %d results from %s in %d pages", len(results), endpoint, pages)

        return results
