"""Owner of the current catalog snapshot.

The snapshot is an explicit ``{index, refreshed_at}`` value held by a
``CatalogStore``. It is refreshed at most once per interval; when a refresh
fails the last good snapshot keeps being served.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict

from model_scout.catalog.client import CatalogClient, CatalogFetchError
from model_scout.catalog.normalize import normalize_catalog
from model_scout.logging import get_logger
from model_scout.models.catalog import CatalogIndex, CatalogMeta, ModelDetail, ModelSummary

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CatalogSnapshot(BaseModel):
    """A normalized catalog and the time it was built."""

    model_config = ConfigDict(frozen=True)

    index: CatalogIndex
    refreshed_at: datetime

    def age_seconds(self, now: datetime) -> float:
        return (now - self.refreshed_at).total_seconds()


class CatalogStore:
    """Fetch-or-reuse access to the catalog snapshot."""

    def __init__(
        self,
        client: CatalogClient,
        refresh_interval: float = 60 * 60 * 24,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the store.

        Args:
            client: Client used to fetch the raw catalog.
            refresh_interval: Seconds a snapshot is reused before refetching.
            clock: Returns the current aware datetime.
        """
        self.client = client
        self.refresh_interval = refresh_interval
        self._clock = clock
        self._snapshot: CatalogSnapshot | None = None
        self._lock = asyncio.Lock()

    @property
    def snapshot(self) -> CatalogSnapshot | None:
        """The last good snapshot, if any."""
        return self._snapshot

    def is_fresh(self) -> bool:
        """Whether a snapshot exists and is younger than the refresh interval."""
        if self._snapshot is None:
            return False
        return self._snapshot.age_seconds(self._clock()) < self.refresh_interval

    async def get(self) -> CatalogIndex:
        """Return the current index, refreshing it when stale.

        Raises:
            CatalogFetchError: If the refresh fails and no earlier snapshot exists.
        """
        if self.is_fresh():
            return self._snapshot.index
        return await self.refresh(force=False)

    async def refresh(self, force: bool = True) -> CatalogIndex:
        """Fetch and normalize a new snapshot.

        Args:
            force: Refetch even if the current snapshot is still fresh.

        Returns:
            The new index, or the last good one if the fetch failed.

        Raises:
            CatalogFetchError: If the fetch fails and no earlier snapshot exists.
        """
        async with self._lock:
            # Another caller may have refreshed while we waited
            if not force and self.is_fresh():
                return self._snapshot.index

            try:
                raw = await self.client.fetch()
            except CatalogFetchError as e:
                if self._snapshot is None:
                    raise
                logger.warning(
                    "Catalog refresh failed, serving stale snapshot",
                    error=str(e),
                    refreshed_at=self._snapshot.refreshed_at.isoformat(),
                )
                return self._snapshot.index

            index = normalize_catalog(raw)
            self._snapshot = CatalogSnapshot(index=index, refreshed_at=self._clock())
            logger.info(
                "Catalog snapshot refreshed",
                model_count=index.model_count,
                provider_count=len(index.providers),
            )
            return index

    async def get_meta(self) -> CatalogMeta:
        return (await self.get()).meta()

    async def get_summary(self, model_id: str) -> ModelSummary | None:
        return (await self.get()).summary_by_id.get(model_id)

    async def get_detail(self, model_id: str) -> ModelDetail | None:
        return (await self.get()).by_id.get(model_id)
