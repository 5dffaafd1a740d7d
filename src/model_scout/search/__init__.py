"""Search, sort and alternatives over catalog summaries."""

from __future__ import annotations

from collections.abc import Sequence

from model_scout.models.catalog import ModelSummary
from model_scout.models.search import SearchRequest, SearchResult
from model_scout.search.alternatives import find_alternatives
from model_scout.search.filter import filter_summaries
from model_scout.search.sort import is_sort_option, sort_summaries


def search_summaries(summaries: Sequence[ModelSummary], request: SearchRequest) -> SearchResult:
    """Filter, sort and paginate summaries.

    The filter runs in strict mode first. If a non-empty query matches
    nothing strictly, it is re-run in loose mode and the result is flagged
    with ``used_strict=False``.

    Args:
        summaries: All summaries of a catalog snapshot (not modified).
        request: Filters plus 1-based page, page size and sort mode.

    Returns:
        The requested page, the total match count and the strictness flag.
    """
    filtered = filter_summaries(summaries, request, strict=True)
    used_strict = True

    if request.query and not filtered:
        filtered = filter_summaries(summaries, request, strict=False)
        used_strict = False

    ordered = sort_summaries(
        filtered,
        request.sort,
        request.query,
        request.min_context,
        request.min_output,
    )

    start = (request.page - 1) * request.page_size
    return SearchResult(
        items=ordered[start : start + request.page_size],
        total=len(ordered),
        used_strict=used_strict,
    )


__all__ = [
    "filter_summaries",
    "find_alternatives",
    "is_sort_option",
    "search_summaries",
    "sort_summaries",
]
