"""Evaluation module for ranking run reports."""

from .metrics import (
    compute_score_distribution_stats,
    summarize_matches,
    results_to_frame,
    sanity_check_ranking,
    ScoreDistributionStats,
    MatchSummary,
)

__all__ = [
    "compute_score_distribution_stats",
    "summarize_matches",
    "results_to_frame",
    "sanity_check_ranking",
    "ScoreDistributionStats",
    "MatchSummary",
]
