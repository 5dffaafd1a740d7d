"""Tests for open-weights alternatives ranking."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from model_scout.models import ReasonCandidate
from model_scout.search.alternatives import (
    capability_score,
    find_alternatives,
    modality_match,
    price_info,
    ratio_info,
    recency_info,
    score_alternative,
    select_reasons,
)

if TYPE_CHECKING:
    from model_scout.models import CatalogIndex, ModelSummary

    from tests.conftest import SummaryFactory


@pytest.fixture
def base(make_summary: SummaryFactory) -> ModelSummary:
    return make_summary(id="closed/base", name="Base")


def _reason(label: str, impact: float, polarity: str = "positive") -> ReasonCandidate:
    return ReasonCandidate(label=label, impact=impact, polarity=polarity)


class TestFindAlternatives:
    """Tests for find_alternatives."""

    def test_ranking_example(
        self, base: ModelSummary, make_summary: SummaryFactory, now: float
    ) -> None:
        """Test ranking of a strong and a weak open-weights candidate."""
        good = make_summary(
            id="open/a",
            open_weights=True,
            context_tokens=120_000,
            output_tokens=2200,
            price_in_per_m_tokens=1,
            price_out_per_m_tokens=1,
            last_updated="2024-10-01",
        )
        weak = make_summary(
            id="open/b",
            open_weights=True,
            context_tokens=50_000,
            output_tokens=500,
            tool_call=False,
            structured_output=False,
            price_in_per_m_tokens=6,
            price_out_per_m_tokens=6,
            last_updated="2021-03-01",
            status="deprecated",
        )

        items = find_alternatives([weak, good], base, limit=6, now=now)

        assert [item.id for item in items] == ["open/a", "open/b"]
        assert items[0].score == 100
        assert items[1].score == 28
        assert "Deprecated" in items[1].reasons
        assert items[1].summary == weak

    def test_deprecation_penalty(
        self, base: ModelSummary, make_summary: SummaryFactory, now: float
    ) -> None:
        """Test deprecated candidates score at least 15 points lower."""
        active = make_summary(id="open/active", open_weights=True)
        deprecated = make_summary(id="open/old", open_weights=True, status="Deprecated")

        items = find_alternatives([deprecated, active], base, limit=6, now=now)
        scores = {item.id: item.score for item in items}

        assert scores["open/active"] - scores["open/old"] >= 15
        assert [item.id for item in items] == ["open/active", "open/old"]

    def test_modality_gap_is_not_excluded(
        self, make_summary: SummaryFactory, now: float
    ) -> None:
        """Test candidates missing base modalities are ranked, not excluded."""
        base = make_summary(id="closed/vision", modalities_in=("text", "image"))
        candidate = make_summary(id="open/text", open_weights=True, modalities_in=("text",))

        items = find_alternatives([candidate], base, limit=6, now=now)

        assert [item.id for item in items] == ["open/text"]
        assert "Missing input modalities" in items[0].reasons
        assert any("modalities" in reason for reason in items[0].reasons)

    def test_pool_is_open_weights_without_base(
        self, make_summary: SummaryFactory, now: float
    ) -> None:
        """Test pool is limited to open-weights models other than the base."""
        base = make_summary(id="open/base", open_weights=True)
        pool = [
            base,
            make_summary(id="closed/x", open_weights=False),
            make_summary(id="unknown/y", open_weights=None),
            make_summary(id="open/z", open_weights=True),
        ]

        items = find_alternatives(pool, base, limit=6, now=now)

        assert [item.id for item in items] == ["open/z"]

    def test_limit(self, base: ModelSummary, make_summary: SummaryFactory, now: float) -> None:
        """Test results are truncated to the limit in pool order."""
        pool = [make_summary(id=f"open/{i}", open_weights=True) for i in range(5)]

        assert len(find_alternatives(pool, base, limit=3, now=now)) == 3
        assert find_alternatives(pool, base, limit=0, now=now) == []
        # Equal scores keep pool order
        assert [item.id for item in find_alternatives(pool, base, limit=2, now=now)] == [
            "open/0",
            "open/1",
        ]

    def test_scores_are_bounded_integers(self, catalog: CatalogIndex, now: float) -> None:
        """Test scores are integers between 0 and 100."""
        for base in catalog.summaries:
            for item in find_alternatives(catalog.summaries, base, limit=20, now=now):
                assert isinstance(item.score, int)
                assert 0 <= item.score <= 100
                assert item.id != base.id
                assert item.summary.open_weights is True
                assert 1 <= len(item.reasons) <= 4

    def test_unknown_limits_are_neutral(
        self, base: ModelSummary, make_summary: SummaryFactory, now: float
    ) -> None:
        """Test unknown context limits score as neutral."""
        candidate = make_summary(id="open/x", open_weights=True, context_tokens=None)
        score, reasons = score_alternative(base, candidate, now=now)

        # Context contributes 0.5 * 25 instead of 25
        assert score == 88
        assert "Missing context info" in reasons


class TestDimensions:
    """Tests for the per-dimension scoring helpers."""

    def test_modality_match(self) -> None:
        """Test modality match scoring for partial, empty and missing overlap."""
        partial = modality_match(("text", "image"), ("TEXT",))
        assert partial.score == 0.5
        assert partial.status == "partial"

        none = modality_match(("text",), ("audio",))
        assert none.score == 0
        assert none.status == "none"

        empty = modality_match((), ("audio",))
        assert empty.score == 1
        assert empty.status == "match"
        assert empty.has_base is False

    def test_ratio_info(self) -> None:
        """Test ratio scoring with known and unknown limits."""
        assert ratio_info(100, 150).score == 1
        assert ratio_info(100, 150).ratio == 1.5
        assert ratio_info(100, 50).score == 0.5

        unknown = ratio_info(100, None)
        assert unknown.score == 0.5
        assert unknown.ratio is None
        assert unknown.has_base is True
        assert unknown.has_candidate is False

        assert ratio_info(None, 100).score == 0.5
        assert ratio_info(0, 100).score == 0.5

    def test_price_info(self, make_summary: SummaryFactory) -> None:
        """Test price scoring with priced and unpriced models."""
        priced = make_summary(price_in_per_m_tokens=2, price_out_per_m_tokens=2)
        dearer = make_summary(price_in_per_m_tokens=3, price_out_per_m_tokens=3)
        unpriced = make_summary(price_in_per_m_tokens=None, price_out_per_m_tokens=None)

        assert price_info(priced, priced).score == 1
        assert price_info(priced, dearer).score == 0.5
        assert price_info(dearer, priced).score == 1
        assert price_info(priced, unpriced).score == 0.3
        assert price_info(unpriced, priced).score == 0.6
        assert price_info(unpriced, unpriced).score == 0.5

    def test_recency_info(self, make_summary: SummaryFactory, now: float) -> None:
        """Test recency scoring relative to the base model."""
        base = make_summary(last_updated="2024-06-01")

        newer = recency_info(base, make_summary(last_updated="2024-08-01"), now=now)
        assert newer.score == 1
        assert newer.is_newer_than_base

        mid = recency_info(base, make_summary(last_updated="2023-06-01"), now=now)
        assert mid.score == 0.6
        assert not mid.is_recent
        assert not mid.is_older

        old = recency_info(base, make_summary(last_updated="2021-01-01"), now=now)
        assert old.score == 0.2
        assert old.is_older

        undated = make_summary(last_updated=None, release_date=None, knowledge_cutoff=None)
        assert recency_info(base, undated, now=now).score == 0.5

    def test_recency_falls_back_to_release_date(
        self, make_summary: SummaryFactory, now: float
    ) -> None:
        """Test recency uses the release date when last updated is missing."""
        base = make_summary(last_updated="2024-06-01")
        candidate = make_summary(last_updated=None, release_date="2024-09-01")
        assert recency_info(base, candidate, now=now).is_newer_than_base

    def test_capability_score(self, make_summary: SummaryFactory) -> None:
        """Test capability score with known and missing flags."""
        full = make_summary()
        bare = make_summary(
            tool_call=None, structured_output=None, reasoning=None, temperature=None
        )

        assert capability_score(full, full) == 1
        assert capability_score(full, bare) == 0
        # Unrequired features earn a small credit
        assert capability_score(bare, full) == 0.25
        assert capability_score(bare, bare) == 0


class TestSelectReasons:
    """Tests for select_reasons."""

    def test_top_by_impact(self) -> None:
        """Test reasons are picked by highest impact."""
        candidates = [
            _reason("a", 1),
            _reason("b", 5),
            _reason("c", 3),
            _reason("d", 4),
            _reason("e", 2),
        ]
        assert select_reasons(candidates) == ["b", "d", "c", "e"]

    def test_ties_keep_order(self) -> None:
        """Test equal impacts keep candidate order."""
        candidates = [_reason("first", 2), _reason("second", 2), _reason("third", 2)]
        assert select_reasons(candidates) == ["first", "second", "third"]

    def test_negative_forced_in(self) -> None:
        """Test the strongest negative reason replaces the last pick."""
        candidates = [
            _reason("a", 10),
            _reason("b", 9),
            _reason("c", 8),
            _reason("d", 7),
            _reason("small-negative", 1, "negative"),
            _reason("bigger-negative", 2, "negative"),
        ]
        assert select_reasons(candidates) == ["a", "b", "c", "bigger-negative"]

    def test_negative_already_present(self) -> None:
        """Test no reason is swapped when a negative is already picked."""
        candidates = [
            _reason("neg", 10, "negative"),
            _reason("a", 9),
            _reason("b", 8),
            _reason("c", 7),
            _reason("d", 6),
        ]
        assert select_reasons(candidates) == ["neg", "a", "b", "c"]

    def test_widened_to_minimum(self) -> None:
        """Test selection widens to the minimum reason count."""
        candidates = [_reason("a", 3), _reason("b", 2), _reason("neg", 1, "negative")]
        assert select_reasons(candidates, limit=1) == ["a", "b"]

    def test_empty(self) -> None:
        """Test no candidates yields no reasons."""
        assert select_reasons([]) == []
