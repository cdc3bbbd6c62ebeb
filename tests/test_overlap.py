"""
Tests for lexical overlap scoring.
"""

import pytest

from matchmaking.configs import MatchConfig
from matchmaking.text import OverlapResult, text_overlap_score, overlap_from_tokens, round_half_up


class TestRoundHalfUp:
    """Test rounding of scaled scores."""

    @pytest.mark.parametrize("value,expected", [
        (0.4, 0), (0.5, 1), (2.5, 3), (12.5, 13), (14.7, 15), (21.4, 21),
    ])
    def test_half_rounds_up(self, value, expected):
        assert round_half_up(value) == expected


class TestTextOverlapScore:
    """Test Jaccard-based overlap score."""

    def test_empty_side_scores_zero(self):
        """Either side empty gives a zero result."""
        assert text_overlap_score("", "software") == OverlapResult(0, [])
        assert text_overlap_score("software", None) == OverlapResult(0, [])
        assert text_overlap_score("de e a", "software") == OverlapResult(0, [])

    def test_disjoint_scores_zero(self):
        result = text_overlap_score("frutas orgânicas", "software gestão")
        assert result.score == 0
        assert result.matched_keywords == []

    def test_partial_overlap(self):
        """One shared token out of seven: round(150 / 7) = 21."""
        result = text_overlap_score(
            "Software de gestão empresarial para PMEs",
            "Clientes no setor de tecnologia e software",
        )
        assert result.score == 21
        assert result.matched_keywords == ["software"]

    def test_half_score_rounds_up(self):
        """1/12 * 150 = 12.5 rounds to 13."""
        result = text_overlap_score(
            "alfa bravo charlie delta echo foxtrot",
            "alfa golf hotel india juliet kilo lima",
        )
        assert result.score == 13

    def test_score_capped(self):
        """Identical vocabularies saturate at the cap."""
        result = text_overlap_score("software gestão", "gestão software")
        assert result.score == 50

    def test_symmetric_score(self):
        a = "Consultoria em expansão de negócios e vendas"
        b = "Vendas consultivas para negócios"
        assert text_overlap_score(a, b).score == text_overlap_score(b, a).score

    def test_keywords_follow_first_text(self):
        """Matched keywords are listed in the first text's order, at most five."""
        a = "zeta alfa bravo charlie delta echo foxtrot"
        b = "foxtrot echo delta charlie bravo alfa zeta"
        result = text_overlap_score(a, b)
        assert result.matched_keywords == ["zeta", "alfa", "bravo", "charlie", "delta"]
        reverse = text_overlap_score(b, a)
        assert reverse.matched_keywords == ["foxtrot", "echo", "delta", "charlie", "bravo"]

    def test_custom_scale_and_cap(self):
        config = MatchConfig(overlap_scale=10, overlap_cap=8, max_keywords=1)
        result = text_overlap_score("alfa bravo", "alfa bravo", config)
        assert result.score == 8
        assert result.matched_keywords == ["alfa"]


class TestOverlapFromTokens:
    """Test scoring of pre-tokenized input."""

    def test_same_as_text_version(self):
        result = overlap_from_tokens(["software", "gestao"], ["software", "vendas"])
        assert result == text_overlap_score("software gestão", "software vendas")
        assert result.score == 50

    def test_empty_tokens(self):
        assert overlap_from_tokens([], ["software"]) == OverlapResult()
