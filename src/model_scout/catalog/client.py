"""Client for the upstream model catalog (models.dev ``api.json``)."""

from __future__ import annotations

from typing import Any

import httpx

from model_scout.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CATALOG_URL = "https://models.dev/api.json"


class CatalogFetchError(Exception):
    """The upstream catalog could not be fetched or decoded."""


class CatalogClient:
    """Fetches the raw provider -> model catalog payload."""

    def __init__(
        self,
        url: str = DEFAULT_CATALOG_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            url: Catalog URL returning a JSON object.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def fetch(self) -> dict[str, Any]:
        """Fetch the raw catalog.

        Returns:
            The decoded JSON object.

        Raises:
            CatalogFetchError: On HTTP errors, transport errors, invalid JSON
                or a payload that is not a JSON object.
        """
        logger.info("Fetching catalog", url=self.url)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.get(self.url)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise CatalogFetchError(
                f"Failed to fetch catalog ({e.response.status_code})"
            ) from e
        except httpx.RequestError as e:
            raise CatalogFetchError(f"Request failed: {e}") from e
        except ValueError as e:
            raise CatalogFetchError(f"Invalid catalog JSON: {e}") from e

        if not isinstance(data, dict):
            raise CatalogFetchError(
                f"Expected a JSON object, got {type(data).__name__}"
            )

        logger.info("Received catalog", provider_count=len(data))
        return data
