"""
Lexical overlap scoring between two free-text fields.

Score formula:
    jaccard = |A ∩ B| / |A ∪ B|
    raw = round_half_up(jaccard * overlap_scale)
    score = min(raw, overlap_cap)

With the default scale of 150 and cap of 50, any pair sharing at least a
third of its combined vocabulary saturates the dimension.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..configs.match_config import MatchConfig
from .tokenizer import tokenize_ordered


@dataclass
class OverlapResult:
    """Bounded overlap score plus a sample of the shared tokens."""
    score: int = 0
    matched_keywords: List[str] = field(default_factory=list)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up."""
    return int(math.floor(value + 0.5))


def overlap_from_tokens(
    tokens_a: Sequence[str],
    tokens_b: Sequence[str],
    config: Optional[MatchConfig] = None
) -> OverlapResult:
    """
    Score two already tokenized texts.

    Args:
        tokens_a: Unique tokens of the first text, in first-appearance order
        tokens_b: Unique tokens of the second text
        config: Matcher configuration

    Returns:
        OverlapResult; matched keywords follow the order of tokens_a
    """
    if not tokens_a or not tokens_b:
        return OverlapResult()
    config = config or MatchConfig()

    set_b = set(tokens_b)
    matched = [t for t in tokens_a if t in set_b]
    if not matched:
        return OverlapResult()

    union = len(set(tokens_a) | set_b)
    jaccard = len(matched) / union
    raw = round_half_up(jaccard * config.overlap_scale)

    return OverlapResult(
        score=min(raw, config.overlap_cap),
        matched_keywords=matched[:config.max_keywords],
    )


def text_overlap_score(
    text_a: Optional[str],
    text_b: Optional[str],
    config: Optional[MatchConfig] = None
) -> OverlapResult:
    """
    Compute the overlap score between two free-text fields.

    The score itself is symmetric; only the keyword sample order depends
    on which text comes first.
    """
    config = config or MatchConfig()
    return overlap_from_tokens(
        tokenize_ordered(text_a, config),
        tokenize_ordered(text_b, config),
        config,
    )
