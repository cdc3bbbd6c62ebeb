"""
Ranking of a candidate pool against one subject.

The caller is responsible for fetching, paginating and role-filtering the
pool; the ranker only scores, filters out NONE matches and orders.
"""

import logging
from typing import Iterable, List, Optional

from ..configs.match_config import MatchConfig
from ..text.tokenizer import tokenize_ordered
from .aggregator import score_pair
from .schema import Profile, MatchResult, MatchType

logger = logging.getLogger(__name__)


def rank_matches(
    subject: Profile,
    candidates: Iterable[Profile],
    config: Optional[MatchConfig] = None,
    limit: Optional[int] = None
) -> List[MatchResult]:
    """
    Rank candidates by compatibility with the subject.

    Results with match type NONE are dropped, which always removes the
    subject itself. Ordering is by score descending; equal scores keep
    the order of ``candidates``.

    Args:
        subject: Profile requesting matches
        candidates: Candidate pool, may include the subject
        config: Matcher configuration (defaults when omitted)
        limit: Keep only the first ``limit`` results when set

    Returns:
        Ranked list of MatchResult
    """
    config = config or MatchConfig()
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    # Subject text is tokenized once per call, never cached across calls
    sell_tokens = tokenize_ordered(subject.what_i_sell, config)
    need_tokens = tokenize_ordered(subject.what_i_need, config)

    n_candidates = 0
    results = []
    for candidate in candidates:
        n_candidates += 1
        result = score_pair(subject, candidate, config, sell_tokens, need_tokens)
        if result.match_type != MatchType.NONE:
            results.append(result)

    # sorted() is stable, also with reverse=True
    ranked = sorted(results, key=lambda r: r.score, reverse=True)
    if limit is not None:
        ranked = ranked[:limit]

    logger.debug(f"Ranked {n_candidates} candidates for {subject.id}: {len(results)} matches")
    return ranked
