"""
Pairwise compatibility scoring between a subject and one candidate.

Four independent dimensions are evaluated in a fixed order:

    SELLS_NEEDS  overlap(candidate.what_i_sell, subject.what_i_need)
    NEEDS_SELLS  overlap(subject.what_i_sell, candidate.what_i_need) * 0.7
    SECTOR       shared partnership_interests, 10 pts each
    TAG          shared tags, 5 pts each

The two text dimensions are directional, so calculate_match(a, b) and
calculate_match(b, a) generally differ. Text dimensions only count when
the raw overlap score exceeds ``text_min_raw_score``; label dimensions
count for any non-empty intersection. A pair can therefore carry reasons
and still be classified NONE.
"""

import logging
from typing import List, Optional, Sequence

from ..configs.match_config import MatchConfig
from ..text.overlap import OverlapResult, overlap_from_tokens, round_half_up
from ..text.tokenizer import tokenize_ordered
from .classifier import classify_score
from .schema import Profile, MatchReason, MatchResult, MatchType, ReasonType

logger = logging.getLogger(__name__)


def calculate_match(
    subject: Profile,
    candidate: Profile,
    config: Optional[MatchConfig] = None
) -> MatchResult:
    """
    Compute the compatibility of a candidate with the subject.

    Args:
        subject: Profile requesting matches
        candidate: Profile being evaluated
        config: Matcher configuration (defaults when omitted)

    Returns:
        MatchResult with score in [0, max_score], tier and reasons
    """
    config = config or MatchConfig()
    return score_pair(
        subject,
        candidate,
        config,
        subject_sell_tokens=tokenize_ordered(subject.what_i_sell, config),
        subject_need_tokens=tokenize_ordered(subject.what_i_need, config),
    )


def score_pair(
    subject: Profile,
    candidate: Profile,
    config: MatchConfig,
    subject_sell_tokens: Sequence[str],
    subject_need_tokens: Sequence[str]
) -> MatchResult:
    """
    Score a pair using the subject's pre-tokenized text fields.

    The ranker tokenizes the subject once and calls this for every
    candidate; results are identical to calculate_match.
    """
    if candidate.id == subject.id:
        return MatchResult(profile=candidate, score=0, match_type=MatchType.NONE, reasons=[])

    total = 0
    reasons: List[MatchReason] = []

    # Candidate sells what the subject needs
    sells_needs = overlap_from_tokens(
        tokenize_ordered(candidate.what_i_sell, config), subject_need_tokens, config
    )
    reason = _text_reason(
        ReasonType.SELLS_NEEDS, sells_needs,
        config.sells_needs_weight, config.sells_needs_cap, config
    )
    if reason is not None:
        total += reason.points
        reasons.append(reason)

    # Subject sells what the candidate needs
    needs_sells = overlap_from_tokens(
        subject_sell_tokens, tokenize_ordered(candidate.what_i_need, config), config
    )
    reason = _text_reason(
        ReasonType.NEEDS_SELLS, needs_sells,
        config.needs_sells_weight, config.needs_sells_cap, config
    )
    if reason is not None:
        total += reason.points
        reasons.append(reason)

    reason = _label_reason(
        ReasonType.SECTOR,
        subject.partnership_interests, candidate.partnership_interests,
        config.sector_points, config.sector_cap, config.sector_detail_limit, config
    )
    if reason is not None:
        total += reason.points
        reasons.append(reason)

    reason = _label_reason(
        ReasonType.TAG,
        subject.tags, candidate.tags,
        config.tag_points, config.tag_cap, config.tag_detail_limit, config
    )
    if reason is not None:
        total += reason.points
        reasons.append(reason)

    score = min(total, config.max_score)
    match_type = classify_score(score, config)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            f"Scored {subject.id} -> {candidate.id}: total={total}, score={score}, "
            f"type={match_type.value}, reasons={[r.type.value for r in reasons]}"
        )

    return MatchResult(profile=candidate, score=score, match_type=match_type, reasons=reasons)


def shared_labels(mine: Optional[Sequence[str]], theirs: Optional[Sequence[str]]) -> List[str]:
    """Labels of ``mine`` also present in ``theirs``, in the order of ``mine``."""
    their_set = set(theirs or [])
    return [label for label in (mine or []) if label in their_set]


def _text_reason(
    reason_type: ReasonType,
    overlap: OverlapResult,
    weight: float,
    cap: int,
    config: MatchConfig
) -> Optional[MatchReason]:
    """Build a text-overlap reason, or None when the raw score is too low."""
    # Threshold applies to the raw score, before weighting
    if overlap.score <= config.text_min_raw_score:
        return None

    points = min(round_half_up(overlap.score * weight), cap)
    return MatchReason(
        type=reason_type,
        label=config.reason_labels[reason_type.value],
        detail=config.detail_separator.join(overlap.matched_keywords),
        points=points,
        matched=list(overlap.matched_keywords),
    )


def _label_reason(
    reason_type: ReasonType,
    mine: Optional[Sequence[str]],
    theirs: Optional[Sequence[str]],
    points_each: int,
    cap: int,
    detail_limit: int,
    config: MatchConfig
) -> Optional[MatchReason]:
    """Build a shared-label reason, or None when nothing is shared."""
    shared = shared_labels(mine, theirs)
    if not shared:
        return None

    sample = shared[:detail_limit]
    return MatchReason(
        type=reason_type,
        label=config.reason_labels[reason_type.value],
        detail=config.detail_separator.join(sample),
        points=min(len(shared) * points_each, cap),
        matched=sample,
    )
