"""Score to match-tier classification."""

from typing import Optional

from ..configs.match_config import MatchConfig
from .schema import MatchType


def classify_score(score: int, config: Optional[MatchConfig] = None) -> MatchType:
    """
    Map a score to its match tier.

    Lower bounds are inclusive: with default thresholds 70 is STRONG,
    40 is COMMON, 10 is POTENTIAL and 9 is NONE.
    """
    config = config or MatchConfig()
    if score >= config.strong_threshold:
        return MatchType.STRONG
    if score >= config.common_threshold:
        return MatchType.COMMON
    if score >= config.potential_threshold:
        return MatchType.POTENTIAL
    return MatchType.NONE
