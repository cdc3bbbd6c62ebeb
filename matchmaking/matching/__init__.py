"""
Matching module for business compatibility scoring.

Combines the text overlap dimensions with shared sectors and tags into a
single score, classifies it into a tier and ranks candidate pools.
"""

from .schema import Profile, MatchReason, MatchResult, MatchType, ReasonType
from .classifier import classify_score
from .aggregator import calculate_match, score_pair, shared_labels
from .ranker import rank_matches

__all__ = [
    "Profile",
    "MatchReason",
    "MatchResult",
    "MatchType",
    "ReasonType",
    "classify_score",
    "calculate_match",
    "score_pair",
    "shared_labels",
    "rank_matches",
]
