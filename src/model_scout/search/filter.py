"""Boolean filtering of model summaries against a set of filters."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from model_scout.models.catalog import ModelSummary
from model_scout.models.search import SearchFilters

# A query containing one of these is treated as a literal id fragment
_ID_LIKE = re.compile(r"[/:]")


def tokenize(value: str) -> list[str]:
    """Split a query into lower-cased whitespace-delimited tokens."""
    return value.lower().split()


def matches_query(summary: ModelSummary, query: str, strict: bool) -> bool:
    """Match the free-text query against a summary.

    Path-like queries (containing ``/`` or ``:``) are a substring test against
    the id. Otherwise strict mode needs every token in the search text and
    loose mode needs any one of them. An empty query always matches.
    """
    if not query:
        return True

    lower_query = query.lower()
    if _ID_LIKE.search(lower_query):
        return lower_query in summary.id.lower()

    tokens = tokenize(lower_query)
    if not tokens:
        return True

    if strict:
        return all(token in summary.search_text for token in tokens)
    return any(token in summary.search_text for token in tokens)


def includes_all(haystack: Iterable[str], needles: Sequence[str]) -> bool:
    """Case-insensitive check that every needle is present. Empty needles match."""
    if not needles:
        return True
    available = {item.lower() for item in haystack}
    return all(needle.lower() in available for needle in needles)


def _at_least(value: float | None, minimum: float | None) -> bool:
    if minimum is None:
        return True
    return value is not None and value >= minimum


def _at_most(value: float | None, maximum: float | None) -> bool:
    if maximum is None:
        return True
    return value is not None and value <= maximum


def matches_filters(summary: ModelSummary, filters: SearchFilters, strict: bool) -> bool:
    """Return True if the summary satisfies every condition of the filters."""
    if not matches_query(summary, filters.query, strict):
        return False

    if filters.providers and summary.provider_id not in filters.providers:
        return False

    if not includes_all(summary.modalities_in, filters.modalities_in):
        return False
    if not includes_all(summary.modalities_out, filters.modalities_out):
        return False

    # Unknown (None) fails a required capability just like False
    if filters.tool_call and summary.tool_call is not True:
        return False
    if filters.structured_output and summary.structured_output is not True:
        return False
    if filters.temperature and summary.temperature is not True:
        return False
    if filters.open_weights and summary.open_weights is not True:
        return False
    if filters.reasoning and summary.reasoning is not True:
        return False

    if not _at_least(summary.context_tokens, filters.min_context):
        return False
    if not _at_least(summary.output_tokens, filters.min_output):
        return False
    if not _at_most(summary.price_in_per_m_tokens, filters.max_price_in):
        return False
    if not _at_most(summary.price_out_per_m_tokens, filters.max_price_out):
        return False

    if filters.hide_deprecated and summary.is_deprecated:
        return False

    return True


def filter_summaries(
    summaries: Iterable[ModelSummary],
    filters: SearchFilters,
    strict: bool,
) -> list[ModelSummary]:
    """Return the summaries matching ``filters``, in input order.

    Args:
        summaries: Candidate summaries (not modified).
        filters: Conditions to apply.
        strict: All query tokens must match (True) or any token (False).
    """
    return [summary for summary in summaries if matches_filters(summary, filters, strict)]
