"""Tests for the usage cost calculator."""

from __future__ import annotations

import pytest

from model_scout.cost import estimate_cost, rates_from_detail
from model_scout.models import CatalogIndex, CostInputs, CostRates


class TestEstimateCost:
    """Tests for estimate_cost."""

    def test_input_and_output(self) -> None:
        """Test input and output token costs."""
        estimate = estimate_cost(
            CostRates(input=3, output=15),
            CostInputs(input_tokens=2000, output_tokens=1000, calls_per_day=100, calls_per_month=3000),
        )

        assert estimate.per_call == pytest.approx(0.006 + 0.015)
        assert estimate.per_day == pytest.approx(2.1)
        assert estimate.per_month == pytest.approx(63)
        assert estimate.missing_rates == []
        assert [item.label for item in estimate.breakdown][:2] == ["Input tokens", "Output tokens"]

    def test_missing_rate_is_reported(self) -> None:
        """Test buckets with tokens but no rate are reported missing."""
        estimate = estimate_cost(
            CostRates(input=1),
            CostInputs(input_tokens=1_000_000, cache_read_tokens=500),
        )

        assert estimate.per_call == pytest.approx(1)
        assert estimate.missing_rates == ["Cache read tokens"]
        cache_read = next(i for i in estimate.breakdown if i.label == "Cache read tokens")
        assert cache_read.cost_per_call is None

    def test_zero_tokens_cost_nothing(self) -> None:
        """Test zero-token buckets cost nothing."""
        estimate = estimate_cost(CostRates(), CostInputs())

        assert estimate.per_call == 0
        assert estimate.per_day == 0
        assert estimate.missing_rates == []

    def test_unpriced_tokens_are_left_out_of_totals(self) -> None:
        """Test unpriced tokens are left out of totals."""
        estimate = estimate_cost(CostRates(), CostInputs(input_tokens=10, output_tokens=10))

        assert estimate.per_call == 0
        assert estimate.missing_rates == ["Input tokens", "Output tokens"]

    def test_no_known_rates(self) -> None:
        """Test totals are None when no rate is known."""
        inputs = CostInputs(
            input_tokens=1,
            output_tokens=1,
            reasoning_tokens=1,
            cache_read_tokens=1,
            cache_write_tokens=1,
            input_audio_tokens=1,
            output_audio_tokens=1,
        )
        estimate = estimate_cost(CostRates(), inputs)

        assert estimate.per_call is None
        assert estimate.per_day is None
        assert estimate.per_month is None
        assert len(estimate.missing_rates) == 7

    def test_rates_from_detail(self, catalog: CatalogIndex) -> None:
        """Test rates are read from the model detail record."""
        rates = rates_from_detail(catalog.by_id["openai/gpt-4o"])

        assert rates.input == 2.5
        assert rates.output == 10
        assert rates.cache_read == 1.25
        assert rates.cache_write is None
