"""Tests for the catalog HTTP client."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from model_scout.catalog import CatalogClient, CatalogFetchError

CATALOG_URL = "https://catalog.test/api.json"


def make_client(handler: Any) -> CatalogClient:
    return CatalogClient(url=CATALOG_URL, timeout=5.0, transport=httpx.MockTransport(handler))


class TestCatalogClient:
    """Tests for CatalogClient.fetch."""

    async def test_fetch_returns_object(self, raw_catalog: dict[str, Any]) -> None:
        """Test fetch returns the decoded catalog object."""
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(200, json=raw_catalog)

        data = await make_client(handler).fetch()

        assert data == raw_catalog
        assert requested == [CATALOG_URL]

    async def test_http_error(self) -> None:
        """Test HTTP error status raises CatalogFetchError."""
        client = make_client(lambda request: httpx.Response(500, text="upstream down"))

        with pytest.raises(CatalogFetchError, match="500"):
            await client.fetch()

    async def test_invalid_json(self) -> None:
        """Test invalid JSON raises CatalogFetchError."""
        client = make_client(lambda request: httpx.Response(200, content=b"{not json"))

        with pytest.raises(CatalogFetchError, match="Invalid catalog JSON"):
            await client.fetch()

    async def test_non_object_payload(self) -> None:
        """Test non-object payload raises CatalogFetchError."""
        client = make_client(lambda request: httpx.Response(200, json=["openai"]))

        with pytest.raises(CatalogFetchError, match="Expected a JSON object"):
            await client.fetch()

    async def test_transport_error(self) -> None:
        """Test transport failure raises CatalogFetchError."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(CatalogFetchError, match="Request failed"):
            await make_client(handler).fetch()
