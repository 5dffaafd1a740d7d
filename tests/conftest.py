"""Shared test fixtures for model-scout."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from model_scout.models import CatalogIndex, ModelSummary

SummaryFactory = Callable[..., "ModelSummary"]

# Fixed clock for recency scoring: 2024-12-01T00:00:00Z
NOW = datetime(2024, 12, 1, tzinfo=UTC).timestamp()


@pytest.fixture
def now() -> float:
    """Fixed POSIX time used by recency-sensitive tests."""
    return NOW


@pytest.fixture
def make_summary() -> SummaryFactory:
    """Build a fully-populated summary, overriding selected fields."""
    from model_scout.models import ModelSummary

    def factory(**overrides: Any) -> ModelSummary:
        fields: dict[str, Any] = {
            "id": "provider/model",
            "name": "Model",
            "provider_id": "provider",
            "provider_name": "Provider",
            "logo_url": None,
            "modalities_in": ("text",),
            "modalities_out": ("text",),
            "context_tokens": 100_000,
            "output_tokens": 2000,
            "tool_call": True,
            "structured_output": True,
            "temperature": True,
            "open_weights": False,
            "reasoning": True,
            "status": None,
            "price_in_per_m_tokens": 2,
            "price_out_per_m_tokens": 2,
            "release_date": "2024-01-01",
            "last_updated": "2024-06-01",
            "knowledge_cutoff": "2024-05-01",
            "search_text": "provider model",
        }
        fields.update(overrides)
        return ModelSummary(**fields)

    return factory


@pytest.fixture
def raw_catalog() -> dict[str, Any]:
    """A small models.dev-shaped payload with a few malformed entries."""
    return {
        "openai": {
            "id": "openai",
            "name": "OpenAI",
            "doc": "https://platform.openai.com/docs/models",
            "api": "https://api.openai.com/v1",
            "models": {
                "gpt-4o": {
                    "id": "gpt-4o",
                    "name": "GPT-4o",
                    "family": "gpt",
                    "attachment": True,
                    "reasoning": False,
                    "tool_call": True,
                    "structured_output": True,
                    "temperature": True,
                    "knowledge": "2023-09",
                    "release_date": "2024-05-13",
                    "last_updated": "2024-08-06",
                    "modalities": {"input": ["text", "image"], "output": ["text"]},
                    "open_weights": False,
                    "cost": {"input": 2.5, "output": 10, "cache_read": 1.25},
                    "limit": {"context": 128000, "output": 16384},
                },
                "gpt-3.5-turbo": {
                    "name": "GPT-3.5 Turbo",
                    "tool_call": True,
                    "release_date": "2023-03-01",
                    "modalities": {"input": ["Text"], "output": ["text"]},
                    "cost": {"input": 0.5, "output": 1.5},
                    "limit": {"context": 16385, "output": 4096},
                    "status": "deprecated",
                },
            },
        },
        "mistral": {
            "name": "Mistral",
            "models": {
                "mistral-large": {
                    "name": "Mistral Large",
                    "family": "mistral",
                    "tool_call": True,
                    "open_weights": True,
                    "release_date": "2024-11-01",
                    "modalities": {"input": [" TEXT ", "text", ""], "output": ["text"]},
                    "cost": {"input": "2", "output": "6"},
                    "limit": {"context": "131072", "output": 8192},
                },
                # Same full id as above once prefixed: first one wins
                "mistral/mistral-large": {"name": "Duplicate Mistral Large"},
                "broken": "not-an-object",
            },
        },
        "deepseek": {
            "name": "DeepSeek",
            "models": {
                "deepseek-r1": {
                    "name": "DeepSeek R1",
                    "reasoning": True,
                    "open_weights": True,
                    "tool_call": "yes",
                    "deprecated": True,
                    "modalities": {"input": ["text"], "output": ["text"]},
                    "limit": {"context": 64000, "output": 8000},
                    "last_updated": "2025-01-20",
                },
            },
        },
        "empty": {"name": "Empty Provider"},
        "bad": None,
    }


@pytest.fixture
def catalog(raw_catalog: dict[str, Any]) -> CatalogIndex:
    """Normalized index of ``raw_catalog``."""
    from model_scout.catalog import normalize_catalog

    return normalize_catalog(raw_catalog)
