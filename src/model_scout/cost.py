"""Usage cost estimates from per-million-token rates."""

from __future__ import annotations

from model_scout.models.catalog import ModelDetail
from model_scout.models.cost import CostBreakdownItem, CostEstimate, CostInputs, CostRates

ONE_MILLION = 1_000_000


def rates_from_detail(detail: ModelDetail) -> CostRates:
    """Take the rates of a catalog model."""
    cost = detail.normalized.cost
    return CostRates(
        input=cost.input,
        output=cost.output,
        reasoning=cost.reasoning,
        cache_read=cost.cache_read,
        cache_write=cost.cache_write,
        input_audio=cost.input_audio,
        output_audio=cost.output_audio,
    )


def _bucket(
    label: str,
    tokens: int,
    price_per_m_tokens: float | None,
    missing_rates: list[str],
) -> CostBreakdownItem:
    if tokens <= 0:
        return CostBreakdownItem(
            label=label, tokens=tokens, price_per_m_tokens=price_per_m_tokens, cost_per_call=0.0
        )
    if price_per_m_tokens is None:
        missing_rates.append(label)
        return CostBreakdownItem(label=label, tokens=tokens, price_per_m_tokens=None)
    return CostBreakdownItem(
        label=label,
        tokens=tokens,
        price_per_m_tokens=price_per_m_tokens,
        cost_per_call=tokens / ONE_MILLION * price_per_m_tokens,
    )


def estimate_cost(rates: CostRates, inputs: CostInputs) -> CostEstimate:
    """Estimate per-call, daily and monthly cost.

    Buckets with tokens but no known rate are listed in ``missing_rates`` and
    left out of the totals. Totals are None when no bucket has a known cost.
    """
    missing_rates: list[str] = []
    breakdown = [
        _bucket("Input tokens", inputs.input_tokens, rates.input, missing_rates),
        _bucket("Output tokens", inputs.output_tokens, rates.output, missing_rates),
        _bucket("Reasoning tokens", inputs.reasoning_tokens, rates.reasoning, missing_rates),
        _bucket("Cache read tokens", inputs.cache_read_tokens, rates.cache_read, missing_rates),
        _bucket("Cache write tokens", inputs.cache_write_tokens, rates.cache_write, missing_rates),
        _bucket("Input audio tokens", inputs.input_audio_tokens, rates.input_audio, missing_rates),
        _bucket(
            "Output audio tokens", inputs.output_audio_tokens, rates.output_audio, missing_rates
        ),
    ]

    known = [item.cost_per_call for item in breakdown if item.cost_per_call is not None]
    per_call = sum(known) if known else None

    return CostEstimate(
        per_call=per_call,
        per_day=per_call * inputs.calls_per_day if per_call is not None else None,
        per_month=per_call * inputs.calls_per_month if per_call is not None else None,
        breakdown=breakdown,
        missing_rates=missing_rates,
    )
