"""
Business Compatibility Matching

This package scores how well two members of a business club fit each other
and ranks a candidate pool for one member.

Key Design Decisions:
- Lexical token overlap only (no embeddings)
- Four independent dimensions: sells/needs in both directions, shared
  sectors, shared tags
- Every function is pure; nothing is cached across calls
- All weights, caps and thresholds live in a single MatchConfig
"""

from .configs import MatchConfig
from .text import tokenize, text_overlap_score
from .matching import (
    Profile,
    MatchReason,
    MatchResult,
    MatchType,
    ReasonType,
    calculate_match,
    classify_score,
    rank_matches,
)

__version__ = "1.0.0"

__all__ = [
    "MatchConfig",
    "Profile",
    "MatchReason",
    "MatchResult",
    "MatchType",
    "ReasonType",
    "tokenize",
    "text_overlap_score",
    "calculate_match",
    "classify_score",
    "rank_matches",
]
