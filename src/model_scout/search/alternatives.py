"""Nearest open-weights alternatives for a base model.

Every open-weights candidate is scored 0-100 across six weighted dimensions
(modalities, context, output, capabilities, price, recency) and deprecated
candidates lose a flat penalty. Nothing is hard-filtered beyond open weights,
so a base always gets some alternative when one exists.

Each evaluated sub-dimension also yields a ``ReasonCandidate`` with a signed
impact; ``select_reasons`` turns those into the short list of labels shown
next to the score.
"""

from __future__ import annotations

import math
import time
from collections.abc import Iterable, Sequence

from model_scout.models.alternatives import (
    AlternativeItem,
    ModalitiesInfo,
    ModalityMatch,
    PriceInfo,
    RatioInfo,
    ReasonCandidate,
    RecencyInfo,
)
from model_scout.models.catalog import ModelSummary
from model_scout.search.dates import parse_timestamp
from model_scout.search.score import clamp

WEIGHTS: dict[str, float] = {
    "modality": 20,
    "context": 25,
    "output": 15,
    "capability": 20,
    "price": 10,
    "recency": 10,
}
TOTAL_WEIGHT = sum(WEIGHTS.values())
WEIGHT_SCALE = 100 / TOTAL_WEIGHT
DEPRECATED_PENALTY = 20

# Summary attribute -> label used in reasons
CAPABILITY_FEATURES: tuple[tuple[str, str], ...] = (
    ("tool_call", "tool calling"),
    ("structured_output", "structured output"),
    ("reasoning", "reasoning"),
    ("temperature", "temperature control"),
)

NEUTRAL_SCORE = 0.5
PRICE_UNKNOWN_SCORE = 0.3  # Base is priced, candidate is not
PRICE_AVAILABLE_SCORE = 0.6  # Candidate is priced, base is not
UNREQUIRED_CAPABILITY_CREDIT = 0.25
SIMILAR_RATIO = 0.9

YEAR_SECONDS = 60 * 60 * 24 * 365
RECENT_SCORE = 1.0
WITHIN_TWO_YEARS_SCORE = 0.6
OLDER_SCORE = 0.2

MAX_REASONS = 4
MIN_REASONS = 2

_MODALITY_LABELS = {
    "input": {
        "match": "Matches input modalities",
        "partial": "Missing input modalities",
        "none": "Input modalities differ",
    },
    "output": {
        "match": "Matches output modalities",
        "partial": "Missing output modalities",
        "none": "Output modalities differ",
    },
}


def weighted_contribution(score: float, weight: float) -> float:
    return score * weight * WEIGHT_SCALE


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ============================================================================
# Dimension scoring
# ============================================================================


def modality_match(base: Sequence[str], candidate: Sequence[str]) -> ModalityMatch:
    """Fraction of the base modalities the candidate also offers.

    A base that declares nothing is matched perfectly.
    """
    wanted = [item.lower() for item in base]
    if not wanted:
        return ModalityMatch(score=1.0, status="match", has_base=False)

    offered = {item.lower() for item in candidate}
    missing = sum(1 for item in wanted if item not in offered)
    if missing == 0:
        status = "match"
    elif missing == len(wanted):
        status = "none"
    else:
        status = "partial"
    return ModalityMatch(
        score=(len(wanted) - missing) / len(wanted), status=status, has_base=True
    )


def modalities_info(base: ModelSummary, candidate: ModelSummary) -> ModalitiesInfo:
    input_match = modality_match(base.modalities_in, candidate.modalities_in)
    output_match = modality_match(base.modalities_out, candidate.modalities_out)
    return ModalitiesInfo(
        score=(input_match.score + output_match.score) / 2,
        input=input_match,
        output=output_match,
    )


def ratio_info(base_value: float | None, candidate_value: float | None) -> RatioInfo:
    """Score a candidate limit against the base limit.

    Meeting or exceeding the base scores 1.0; below it scores the ratio.
    Either side unknown is neutral (0.5).
    """
    has_base = base_value is not None and base_value > 0
    has_candidate = candidate_value is not None
    if not has_base or not has_candidate:
        return RatioInfo(
            score=NEUTRAL_SCORE, has_base=has_base, has_candidate=has_candidate
        )

    ratio = candidate_value / base_value
    return RatioInfo(
        score=clamp(ratio, 0.0, 1.0),
        ratio=ratio,
        has_base=has_base,
        has_candidate=has_candidate,
    )


def estimate_price(summary: ModelSummary) -> float | None:
    """Input plus output price, or None when neither is known."""
    if not summary.has_price:
        return None
    return (summary.price_in_per_m_tokens or 0) + (summary.price_out_per_m_tokens or 0)


def price_info(base: ModelSummary, candidate: ModelSummary) -> PriceInfo:
    """Score the candidate's summed price against the base's.

    A priced base with an unpriced candidate is penalized (0.3), unlike the
    neutral 0.5 that unknown limits receive in ``ratio_info``.
    """
    base_has_price = base.has_price
    candidate_has_price = candidate.has_price
    flags = {"base_has_price": base_has_price, "candidate_has_price": candidate_has_price}

    if not base_has_price and not candidate_has_price:
        return PriceInfo(score=NEUTRAL_SCORE, **flags)
    if base_has_price and not candidate_has_price:
        return PriceInfo(score=PRICE_UNKNOWN_SCORE, **flags)
    if not base_has_price and candidate_has_price:
        return PriceInfo(score=PRICE_AVAILABLE_SCORE, **flags)

    base_price = estimate_price(base)
    candidate_price = estimate_price(candidate)
    if base_price is None or candidate_price is None or base_price <= 0:
        return PriceInfo(score=NEUTRAL_SCORE, **flags)

    ratio = candidate_price / base_price
    if ratio <= 1:
        score = 1.0
    elif ratio >= 2:
        score = 0.0
    else:
        score = 1 - (ratio - 1)
    return PriceInfo(score=score, ratio=ratio, **flags)


def summary_timestamp(summary: ModelSummary) -> float | None:
    """Timestamp of the best available date: last update, release, knowledge cutoff."""
    value = summary.last_updated or summary.release_date or summary.knowledge_cutoff
    return parse_timestamp(value)


def recency_info(
    base: ModelSummary,
    candidate: ModelSummary,
    now: float | None = None,
) -> RecencyInfo:
    """Score how recent the candidate is.

    Newer than the base or updated within a year scores 1.0, within two
    years 0.6, older 0.2. An undated candidate is neutral.
    """
    base_date = summary_timestamp(base)
    candidate_date = summary_timestamp(candidate)

    if candidate_date is None:
        return RecencyInfo(score=NEUTRAL_SCORE, base_date=base_date)

    current = time.time() if now is None else now
    age = current - candidate_date
    is_newer = base_date is not None and candidate_date >= base_date

    if is_newer or age <= YEAR_SECONDS:
        score = RECENT_SCORE
    elif age <= YEAR_SECONDS * 2:
        score = WITHIN_TWO_YEARS_SCORE
    else:
        score = OLDER_SCORE

    return RecencyInfo(
        score=score,
        base_date=base_date,
        candidate_date=candidate_date,
        is_newer_than_base=is_newer,
        is_recent=score == RECENT_SCORE,
        is_older=score == OLDER_SCORE,
    )


def score_capability_feature(base_value: bool | None, candidate_value: bool | None) -> float:
    """Required features must be present; unrequired ones earn a small credit."""
    if base_value is True:
        return 1.0 if candidate_value is True else 0.0
    return UNREQUIRED_CAPABILITY_CREDIT if candidate_value is True else 0.0


def capability_score(base: ModelSummary, candidate: ModelSummary) -> float:
    scores = [
        score_capability_feature(getattr(base, attr), getattr(candidate, attr))
        for attr, _ in CAPABILITY_FEATURES
    ]
    return sum(scores) / len(scores)


# ============================================================================
# Reasons
# ============================================================================


def _modality_reason(info: ModalityMatch, kind: str) -> ReasonCandidate | None:
    if not info.has_base:
        return None
    weight = WEIGHTS["modality"] / 2
    if info.status == "match":
        return ReasonCandidate(
            label=_MODALITY_LABELS[kind]["match"],
            impact=weighted_contribution(info.score, weight),
            polarity="positive",
        )
    return ReasonCandidate(
        label=_MODALITY_LABELS[kind][info.status],
        impact=weighted_contribution(1 - info.score, weight),
        polarity="negative",
    )


def _limit_reason(info: RatioInfo, name: str, weight: float) -> ReasonCandidate | None:
    """Reason for a context/output limit. ``name`` is "Context" or "Output"."""
    if info.ratio is not None:
        if info.ratio >= 1:
            label = f"{name} >= base"
        elif info.ratio >= SIMILAR_RATIO:
            label = f"Similar {name.lower()}"
        else:
            return ReasonCandidate(
                label=f"{name} smaller",
                impact=weighted_contribution(1 - info.score, weight),
                polarity="negative",
            )
        return ReasonCandidate(
            label=label,
            impact=weighted_contribution(info.score, weight),
            polarity="positive",
        )
    if info.has_base and not info.has_candidate:
        return ReasonCandidate(
            label=f"Missing {name.lower()} info",
            impact=weighted_contribution(1 - info.score, weight),
            polarity="negative",
        )
    return None


def _capability_reasons(base: ModelSummary, candidate: ModelSummary) -> list[ReasonCandidate]:
    per_feature = WEIGHTS["capability"] / len(CAPABILITY_FEATURES) * WEIGHT_SCALE
    reasons = []
    for attr, label in CAPABILITY_FEATURES:
        base_value = getattr(base, attr)
        candidate_value = getattr(candidate, attr)
        if base_value is True:
            if candidate_value is True:
                reasons.append(
                    ReasonCandidate(label=f"Supports {label}", impact=per_feature, polarity="positive")
                )
            else:
                reasons.append(
                    ReasonCandidate(label=f"Missing {label}", impact=per_feature, polarity="negative")
                )
        elif candidate_value is True:
            reasons.append(
                ReasonCandidate(
                    label=f"Adds {label}",
                    impact=per_feature * score_capability_feature(base_value, candidate_value),
                    polarity="positive",
                )
            )
    return reasons


def _price_reason(info: PriceInfo) -> ReasonCandidate | None:
    weight = WEIGHTS["price"]
    if info.base_has_price and info.candidate_has_price:
        if info.ratio is not None and info.ratio <= 1:
            return ReasonCandidate(
                label="Lower price",
                impact=weighted_contribution(info.score, weight),
                polarity="positive",
            )
        return ReasonCandidate(
            label="Higher price",
            impact=weighted_contribution(1 - info.score, weight),
            polarity="negative",
        )
    if info.base_has_price:
        return ReasonCandidate(
            label="Price unknown",
            impact=weighted_contribution(1 - info.score, weight),
            polarity="negative",
        )
    if info.candidate_has_price:
        return ReasonCandidate(
            label="Price available",
            impact=weighted_contribution(info.score, weight),
            polarity="positive",
        )
    return None


def _recency_reason(info: RecencyInfo) -> ReasonCandidate | None:
    if info.candidate_date is None:
        return None
    weight = WEIGHTS["recency"]
    if info.is_newer_than_base:
        label = "Newer update"
    elif info.is_recent:
        label = "Recent update"
    elif info.is_older:
        return ReasonCandidate(
            label="Older update",
            impact=weighted_contribution(1 - info.score, weight),
            polarity="negative",
        )
    else:
        return None
    return ReasonCandidate(
        label=label, impact=weighted_contribution(info.score, weight), polarity="positive"
    )


def build_reason_candidates(
    base: ModelSummary,
    candidate: ModelSummary,
    modalities: ModalitiesInfo,
    context: RatioInfo,
    output: RatioInfo,
    price: PriceInfo,
    recency: RecencyInfo,
    deprecated: bool,
) -> list[ReasonCandidate]:
    """Collect a reason for every evaluated sub-dimension, in a fixed order."""
    reasons: list[ReasonCandidate | None] = [
        _modality_reason(modalities.input, "input"),
        _modality_reason(modalities.output, "output"),
        _limit_reason(context, "Context", WEIGHTS["context"]),
        _limit_reason(output, "Output", WEIGHTS["output"]),
        *_capability_reasons(base, candidate),
        _price_reason(price),
        _recency_reason(recency),
    ]
    if deprecated:
        reasons.append(
            ReasonCandidate(label="Deprecated", impact=DEPRECATED_PENALTY, polarity="negative")
        )
    return [reason for reason in reasons if reason is not None]


def select_reasons(
    candidates: Sequence[ReasonCandidate],
    limit: int = MAX_REASONS,
    minimum: int = MIN_REASONS,
) -> list[str]:
    """Pick the labels to show for a candidate.

    1. Rank by impact, highest first (ties keep evaluation order).
    2. Keep the top ``limit``.
    3. If none of those is negative but a negative exists, replace the last
       kept reason with the highest-impact negative.
    4. If fewer than ``minimum`` were kept but more exist, keep the top ``minimum``.
    """
    ranked = sorted(candidates, key=lambda reason: reason.impact, reverse=True)
    selected = ranked[:limit]

    if not any(reason.polarity == "negative" for reason in selected):
        negative = next(
            (reason for reason in ranked[limit:] if reason.polarity == "negative"), None
        )
        if negative is not None:
            selected = [*selected[: limit - 1], negative]

    if len(selected) < minimum and len(ranked) > len(selected):
        selected = ranked[:minimum]

    return [reason.label for reason in selected]


# ============================================================================
# Ranking
# ============================================================================


def score_alternative(
    base: ModelSummary,
    candidate: ModelSummary,
    now: float | None = None,
) -> tuple[int, list[str]]:
    """Score one candidate against the base.

    Returns:
        The 0-100 score and up to four reason labels.
    """
    modalities = modalities_info(base, candidate)
    context = ratio_info(base.context_tokens, candidate.context_tokens)
    output = ratio_info(base.output_tokens, candidate.output_tokens)
    price = price_info(base, candidate)
    recency = recency_info(base, candidate, now=now)
    deprecated = candidate.is_deprecated

    total = (
        weighted_contribution(modalities.score, WEIGHTS["modality"])
        + weighted_contribution(context.score, WEIGHTS["context"])
        + weighted_contribution(output.score, WEIGHTS["output"])
        + weighted_contribution(capability_score(base, candidate), WEIGHTS["capability"])
        + weighted_contribution(price.score, WEIGHTS["price"])
        + weighted_contribution(recency.score, WEIGHTS["recency"])
    )
    if deprecated:
        total -= DEPRECATED_PENALTY

    reasons = select_reasons(
        build_reason_candidates(
            base, candidate, modalities, context, output, price, recency, deprecated
        )
    )
    return round_half_up(clamp(total, 0, 100)), reasons


def find_alternatives(
    summaries: Iterable[ModelSummary],
    base: ModelSummary,
    limit: int,
    now: float | None = None,
) -> list[AlternativeItem]:
    """Rank open-weights substitutes for ``base``.

    Args:
        summaries: Candidate pool (typically the whole catalog).
        base: The model to replace. Excluded from its own results.
        limit: Maximum number of items returned.
        now: Current POSIX time, for recency scoring. Defaults to the clock.

    Returns:
        Items ordered by descending score; ties keep pool order.
    """
    current = time.time() if now is None else now
    ranked = []
    for summary in summaries:
        if summary.id == base.id or summary.open_weights is not True:
            continue
        score, reasons = score_alternative(base, summary, now=current)
        ranked.append(AlternativeItem(id=summary.id, score=score, reasons=reasons, summary=summary))

    ranked.sort(key=lambda item: item.score, reverse=True)
    return ranked[: max(0, limit)]
