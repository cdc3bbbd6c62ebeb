"""
Tests for pairwise compatibility scoring.
"""

import itertools
import logging

import pytest

from matchmaking.configs import MatchConfig
from matchmaking.matching import (
    MatchType,
    ReasonType,
    calculate_match,
    classify_score,
    shared_labels,
)

from conftest import make_profile


def _reason(result, reason_type):
    return next((r for r in result.reasons if r.type == reason_type), None)


class TestSelfMatch:
    """A profile never matches itself."""

    def test_self_match_is_empty(self, joao):
        result = calculate_match(joao, joao)
        assert result.score == 0
        assert result.match_type == MatchType.NONE
        assert result.reasons == []
        assert result.profile is joao

    def test_same_id_different_object(self, joao, mirror_of_joao):
        """Identity is decided by id, not by object."""
        clone = make_profile(
            id=joao.id,
            what_i_sell=mirror_of_joao.what_i_sell,
            what_i_need=mirror_of_joao.what_i_need,
            tags=list(joao.tags),
        )
        assert calculate_match(joao, clone).score == 0


class TestCalculateMatch:
    """Test the four scoring dimensions."""

    def test_shared_sector_and_tag(self, joao, maria):
        """Sector and tag overlap both produce reasons with their labels."""
        result = calculate_match(joao, maria)

        assert result.score > 0
        assert result.match_type != MatchType.NONE

        sector = _reason(result, ReasonType.SECTOR)
        assert sector is not None
        assert sector.detail == "Tecnologia"
        assert sector.points == 10
        assert sector.label == "Setores em comum"

        tag = _reason(result, ReasonType.TAG)
        assert tag is not None
        assert "Vendas" in tag.detail
        assert tag.points == 5

    def test_exact_breakdown(self, joao, maria):
        """joao sells software, maria needs software: 21 raw, 15 weighted."""
        result = calculate_match(joao, maria)

        assert [r.type for r in result.reasons] == [
            ReasonType.NEEDS_SELLS, ReasonType.SECTOR, ReasonType.TAG
        ]
        needs_sells = _reason(result, ReasonType.NEEDS_SELLS)
        assert needs_sells.points == 15
        assert needs_sells.detail == "software"
        assert needs_sells.matched == ["software"]
        assert result.score == 30
        assert result.match_type == MatchType.POTENTIAL

    def test_direction_matters(self, joao, maria):
        """Swapping subject and candidate moves the text overlap to SELLS_NEEDS."""
        result = calculate_match(maria, joao)

        assert [r.type for r in result.reasons] == [
            ReasonType.SELLS_NEEDS, ReasonType.SECTOR, ReasonType.TAG
        ]
        assert _reason(result, ReasonType.SELLS_NEEDS).points == 21
        assert result.score == 36
        assert result.score != calculate_match(joao, maria).score

    def test_no_overlap(self, joao, pedro):
        """Disjoint vocabulary, sectors and tags score nothing."""
        result = calculate_match(joao, pedro)
        assert result.score == 0
        assert result.reasons == []
        assert result.match_type == MatchType.NONE

    def test_score_clamped_to_100(self, joao, mirror_of_joao):
        """50 + 35 + 20 + 10 = 115 is clamped."""
        result = calculate_match(joao, mirror_of_joao)

        assert result.score == 100
        assert result.match_type == MatchType.STRONG
        assert sum(r.points for r in result.reasons) == 115
        assert [r.points for r in result.reasons] == [50, 35, 20, 10]

    def test_missing_fields_are_no_signal(self, joao):
        """None text and label fields contribute nothing and never fail."""
        empty = make_profile(
            id="user-empty", what_i_sell=None, what_i_need=None,
            partnership_interests=None, tags=None,
        )
        assert calculate_match(joao, empty).score == 0
        assert calculate_match(empty, joao).score == 0

    def test_sector_detail_limited_to_three(self):
        labels = ["A", "B", "C", "D", "E"]
        subject = make_profile(id="s", partnership_interests=labels)
        candidate = make_profile(id="c", partnership_interests=list(reversed(labels)))

        sector = _reason(calculate_match(subject, candidate), ReasonType.SECTOR)
        assert sector.points == 30
        assert sector.detail == "A · B · C"

    def test_tag_detail_limited_to_four(self):
        labels = ["A", "B", "C", "D", "E"]
        subject = make_profile(id="s", tags=labels)
        candidate = make_profile(id="c", tags=labels)

        tag = _reason(calculate_match(subject, candidate), ReasonType.TAG)
        assert tag.points == 20
        assert tag.detail == "A · B · C · D"

    def test_labels_compared_exactly(self):
        """Sector and tag labels are not normalized."""
        subject = make_profile(id="s", partnership_interests=["Tecnologia"], tags=["Vendas"])
        candidate = make_profile(id="c", partnership_interests=["tecnologia"], tags=["vendas"])
        assert calculate_match(subject, candidate).reasons == []


class TestThresholds:
    """Text dimensions need raw score above the floor, labels do not."""

    def test_raw_score_at_floor_excluded(self):
        """Raw overlap of exactly 5 does not count."""
        config = MatchConfig(overlap_scale=10)
        subject = make_profile(id="s", what_i_need="alfa")
        candidate = make_profile(id="c", what_i_sell="alfa bravo")

        result = calculate_match(subject, candidate, config)
        assert result.reasons == []
        assert result.score == 0

    def test_raw_score_above_floor_included(self):
        config = MatchConfig(overlap_scale=10)
        subject = make_profile(id="s", what_i_need="alfa")
        candidate = make_profile(id="c", what_i_sell="alfa")

        result = calculate_match(subject, candidate, config)
        assert _reason(result, ReasonType.SELLS_NEEDS).points == 10

    def test_floor_applies_before_weighting(self):
        """Raw 6 passes the floor even though 6 * 0.7 rounds to 4."""
        config = MatchConfig(overlap_scale=6)
        subject = make_profile(id="s", what_i_sell="alfa")
        candidate = make_profile(id="c", what_i_need="alfa")

        reason = _reason(calculate_match(subject, candidate, config), ReasonType.NEEDS_SELLS)
        assert reason is not None
        assert reason.points == 4

    def test_reasons_without_tier(self):
        """A single shared tag gives a reason but stays below POTENTIAL."""
        subject = make_profile(id="s", tags=["Vendas"])
        candidate = make_profile(id="c", tags=["Vendas"])

        result = calculate_match(subject, candidate)
        assert result.score == 5
        assert result.match_type == MatchType.NONE
        assert [r.type for r in result.reasons] == [ReasonType.TAG]


class TestInvariants:
    """Properties that hold for every pair."""

    def test_bounds_and_tier_for_all_pairs(self, joao, maria, pedro, mirror_of_joao):
        pool = [joao, maria, pedro, mirror_of_joao]
        for subject, candidate in itertools.product(pool, repeat=2):
            result = calculate_match(subject, candidate)
            assert 0 <= result.score <= 100
            assert result.match_type == classify_score(result.score)
            assert all(r.points >= 0 for r in result.reasons)
            order = [r.type for r in result.reasons]
            assert order == sorted(order, key=list(ReasonType).index)

    def test_deterministic(self, joao, maria):
        first = calculate_match(joao, maria)
        second = calculate_match(joao, maria)
        assert first == second


class TestSharedLabels:

    def test_subject_order_kept(self):
        assert shared_labels(["C", "A", "B"], ["A", "B", "C"]) == ["C", "A", "B"]

    @pytest.mark.parametrize("mine,theirs", [(None, ["A"]), (["A"], None), ([], [])])
    def test_missing_lists(self, mine, theirs):
        assert shared_labels(mine, theirs) == []


class TestPairLogging:

    LOGGER = "matchmaking.matching.aggregator"

    def test_debug_records_each_pair(self, joao, maria, caplog):
        caplog.set_level(logging.DEBUG, logger=self.LOGGER)
        calculate_match(joao, maria)
        assert any(r.getMessage().startswith(f"Scored {joao.id} -> {maria.id}")
                   for r in caplog.records)

    def test_silent_above_debug(self, joao, maria, caplog):
        caplog.set_level(logging.INFO, logger=self.LOGGER)
        calculate_match(joao, maria)
        assert not any("Scored" in r.getMessage() for r in caplog.records)
