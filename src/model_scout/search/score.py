"""Composite relevance score used by the ``best`` sort mode."""

from __future__ import annotations

from model_scout.models.catalog import ModelSummary
from model_scout.search.filter import tokenize

# Text match bonuses dominate numeric closeness, which dominates capability bonuses
EXACT_ID_BONUS = 100.0
ID_SUBSTRING_BONUS = 60.0
NAME_SUBSTRING_BONUS = 40.0
TOKEN_HIT_BONUS = 8.0
CONTEXT_CLOSENESS_WEIGHT = 10.0
OUTPUT_CLOSENESS_WEIGHT = 6.0
OPEN_WEIGHTS_BONUS = 2.0
TOOL_CALL_BONUS = 1.0
DEPRECATED_PENALTY = 10.0


def clamp(value: float, minimum: float, maximum: float) -> float:
    return min(maximum, max(minimum, value))


def closeness_score(value: float | None, target: float | None) -> float:
    """How close ``value`` is to ``target``, from 0 (far or unknown) to 1 (equal)."""
    if value is None or target is None or target <= 0:
        return 0.0
    return clamp(1 - abs(value - target) / target, 0.0, 1.0)


def score_summary(
    summary: ModelSummary,
    query: str,
    min_context: float | None,
    min_output: float | None,
) -> float:
    """Compute the relevance score of a summary for the active query and thresholds."""
    score = 0.0
    normalized_query = query.strip().lower()

    if normalized_query:
        model_id = summary.id.lower()
        if model_id == normalized_query:
            score += EXACT_ID_BONUS
        elif normalized_query in model_id:
            score += ID_SUBSTRING_BONUS

        if summary.name and normalized_query in summary.name.lower():
            score += NAME_SUBSTRING_BONUS

        for token in tokenize(normalized_query):
            if token in summary.search_text:
                score += TOKEN_HIT_BONUS

    score += closeness_score(summary.context_tokens, min_context) * CONTEXT_CLOSENESS_WEIGHT
    score += closeness_score(summary.output_tokens, min_output) * OUTPUT_CLOSENESS_WEIGHT

    if summary.open_weights is True:
        score += OPEN_WEIGHTS_BONUS
    if summary.tool_call is True:
        score += TOOL_CALL_BONUS
    if summary.is_deprecated:
        score -= DEPRECATED_PENALTY

    return score
