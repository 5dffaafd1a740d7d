"""Catalog fetching, normalization and snapshot ownership."""

from model_scout.catalog.client import CatalogClient, CatalogFetchError
from model_scout.catalog.normalize import normalize_catalog
from model_scout.catalog.store import CatalogSnapshot, CatalogStore

__all__ = [
    "CatalogClient",
    "CatalogFetchError",
    "CatalogSnapshot",
    "CatalogStore",
    "normalize_catalog",
]
