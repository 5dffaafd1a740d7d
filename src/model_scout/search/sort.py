"""Sort strategies for model summaries.

Every strategy returns a new list and relies on ``sorted`` being stable, so
summaries with equal keys keep their input order.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable

from model_scout.models.catalog import ModelSummary
from model_scout.models.search import SORT_OPTIONS, SortOption
from model_scout.search.dates import parse_timestamp
from model_scout.search.score import score_summary


def is_sort_option(value: str | None) -> bool:
    """Whether ``value`` names a supported sort mode."""
    return value in SORT_OPTIONS


def _timestamp_or_zero(value: str | None) -> float:
    # Missing or unparsable dates sort as the earliest possible
    return parse_timestamp(value) or 0.0


def release_key(summary: ModelSummary) -> float:
    return _timestamp_or_zero(summary.release_date)


def updated_key(summary: ModelSummary) -> float:
    return _timestamp_or_zero(summary.last_updated) or _timestamp_or_zero(summary.release_date)


def estimate_price(summary: ModelSummary) -> float:
    """Input plus output price; infinite when both are unknown."""
    if not summary.has_price:
        return math.inf
    return (summary.price_in_per_m_tokens or 0) + (summary.price_out_per_m_tokens or 0)


def context_key(summary: ModelSummary) -> float:
    return summary.context_tokens or 0


def output_key(summary: ModelSummary) -> float:
    return summary.output_tokens or 0


# Sort mode -> (key, descending). "best" depends on the query, see sort_summaries
_SORT_KEYS: dict[str, tuple[Callable[[ModelSummary], float], bool]] = {
    "release": (release_key, True),
    "updated": (updated_key, True),
    "cheapest": (estimate_price, False),
    "context": (context_key, True),
    "output": (output_key, True),
}


def sort_summaries(
    items: Iterable[ModelSummary],
    sort: SortOption | str,
    query: str = "",
    min_context: float | None = None,
    min_output: float | None = None,
) -> list[ModelSummary]:
    """Order summaries by the named strategy.

    Args:
        items: Summaries to order (not modified).
        sort: One of ``SORT_OPTIONS``; unknown names use ``best``.
        query: Active free-text query, used by ``best``.
        min_context: Context threshold, used by ``best`` for closeness.
        min_output: Output threshold, used by ``best`` for closeness.

    Returns:
        A new, sorted list.
    """
    if sort in _SORT_KEYS:
        key, descending = _SORT_KEYS[sort]
        return sorted(items, key=key, reverse=descending)

    def best_key(summary: ModelSummary) -> float:
        return score_summary(summary, query, min_context, min_output)

    return sorted(items, key=best_key, reverse=True)
