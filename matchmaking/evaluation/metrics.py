"""
Reporting and sanity checks for ranking runs.

A ranking run is summarised by:
1. Score distribution of the returned matches
2. Counts per match tier and per reason type
3. Sanity checks on the ranked output (bounds, tier consistency, ordering)
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional, Sequence
import json

import numpy as np
import pandas as pd

from ..configs.match_config import MatchConfig
from ..matching.classifier import classify_score
from ..matching.schema import MatchResult, MatchType, ReasonType

logger = logging.getLogger(__name__)


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 12.0, "p50": 35.0, "p90": 70.0}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class MatchSummary:
    """
    Summary of one ranking run.

    Attributes:
        subject_id: Profile the ranking was computed for
        n_candidates: Size of the candidate pool
        n_matches: Number of ranked (non-NONE) results
        tier_counts: Matches per tier
        reason_counts: Matches carrying each reason type
        distribution_stats: Score statistics, None when there are no matches
    """
    subject_id: str
    n_candidates: int
    n_matches: int
    tier_counts: Dict[str, int] = field(default_factory=dict)
    reason_counts: Dict[str, int] = field(default_factory=dict)
    distribution_stats: Optional[ScoreDistributionStats] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "subject_id": self.subject_id,
            "n_candidates": int(self.n_candidates),
            "n_matches": int(self.n_matches),
            "tier_counts": dict(self.tier_counts),
            "reason_counts": dict(self.reason_counts),
        }
        if self.distribution_stats:
            result["distribution_stats"] = self.distribution_stats.to_dict()
        return result

    def save(self, filepath: str) -> None:
        """Save summary to JSON file."""
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved match summary to {filepath}")

    def summary(self) -> str:
        """Generate text summary."""
        lines = [
            f"Match Summary: {self.subject_id}",
            "=" * 50,
            f"Candidates: {self.n_candidates}",
            f"Matches:    {self.n_matches}",
            "",
            "Tiers:",
        ]
        for tier, count in self.tier_counts.items():
            lines.append(f"  {tier}: {count}")

        lines.extend(["", "Reasons:"])
        for reason, count in self.reason_counts.items():
            lines.append(f"  {reason}: {count}")

        if self.distribution_stats:
            lines.extend([
                "",
                "Score Distribution:",
                f"  Mean: {self.distribution_stats.mean:.2f}",
                f"  Std:  {self.distribution_stats.std:.2f}",
                f"  Min:  {self.distribution_stats.min:.0f}",
                f"  Max:  {self.distribution_stats.max:.0f}",
            ])
            for q_name, q_value in self.distribution_stats.quantiles.items():
                lines.append(f"  {q_name}: {q_value:.2f}")

        return "\n".join(lines)


def compute_score_distribution_stats(
    scores: Sequence[float],
    quantiles: Sequence[float] = (0.1, 0.25, 0.5, 0.75, 0.9)
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for scores.

    Args:
        scores: Match scores (must be non-empty)
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance
    """
    arr = np.asarray(scores, dtype=float)
    if arr.size == 0:
        raise ValueError("Cannot compute distribution stats of an empty score list")

    quantile_dict = {
        f"p{int(q * 100)}": float(np.percentile(arr, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        mean=float(np.mean(arr)),
        std=float(np.std(arr)),
        min=float(np.min(arr)),
        max=float(np.max(arr)),
        quantiles=quantile_dict
    )


def summarize_matches(
    subject_id: str,
    results: Sequence[MatchResult],
    n_candidates: int
) -> MatchSummary:
    """
    Build a MatchSummary for a ranked result list.

    Args:
        subject_id: Profile the ranking was computed for
        results: Output of rank_matches
        n_candidates: Size of the pool that was ranked

    Returns:
        MatchSummary instance
    """
    tiers = Counter(r.match_type.value for r in results)
    reasons = Counter(reason.type.value for r in results for reason in r.reasons)

    # Best tier first; NONE never reaches a ranking
    ranked_tiers = sorted((t for t in MatchType if t.rank > 0), key=lambda t: t.rank, reverse=True)

    stats = None
    if results:
        stats = compute_score_distribution_stats([r.score for r in results])

    return MatchSummary(
        subject_id=subject_id,
        n_candidates=n_candidates,
        n_matches=len(results),
        tier_counts={t.value: tiers.get(t.value, 0) for t in ranked_tiers},
        reason_counts={t.value: reasons.get(t.value, 0) for t in ReasonType},
        distribution_stats=stats,
    )


def results_to_frame(results: Sequence[MatchResult]) -> pd.DataFrame:
    """
    Flatten ranked results into a DataFrame.

    One row per match with the points of every dimension (0 when the
    dimension did not contribute) and the display detail of each reason.
    """
    columns = ["rank", "profile_id", "name", "company", "score", "match_type"]
    for t in ReasonType:
        columns.extend([f"{t.value.lower()}_points", f"{t.value.lower()}_detail"])

    rows = []
    for position, result in enumerate(results, start=1):
        row = {
            "rank": position,
            "profile_id": result.profile.id,
            "name": result.profile.name,
            "company": result.profile.company,
            "score": result.score,
            "match_type": result.match_type.value,
        }
        by_type = {reason.type: reason for reason in result.reasons}
        for t in ReasonType:
            reason = by_type.get(t)
            row[f"{t.value.lower()}_points"] = reason.points if reason else 0
            row[f"{t.value.lower()}_detail"] = reason.detail if reason else ""
        rows.append(row)

    return pd.DataFrame(rows, columns=columns)


def sanity_check_ranking(
    results: Sequence[MatchResult],
    subject_id: Optional[str] = None,
    config: Optional[MatchConfig] = None
) -> List[str]:
    """
    Check ranked output against the engine's invariants.

    Args:
        results: Output of rank_matches
        subject_id: When given, the subject must not appear in results
        config: Matcher configuration used for the ranking

    Returns:
        List of violation messages (empty if consistent)
    """
    config = config or MatchConfig()
    issues = []

    for i, r in enumerate(results):
        if not 0 <= r.score <= config.max_score:
            issues.append(f"Result {i} ({r.profile.id}): score {r.score} out of bounds")
        if r.match_type == MatchType.NONE:
            issues.append(f"Result {i} ({r.profile.id}): NONE match in ranked output")
        expected = classify_score(r.score, config)
        if r.match_type != expected:
            issues.append(
                f"Result {i} ({r.profile.id}): type {r.match_type.value} "
                f"does not match score {r.score} (expected {expected.value})"
            )
        if subject_id is not None and r.profile.id == subject_id:
            issues.append(f"Result {i}: subject {subject_id} ranked against itself")

    scores = np.array([r.score for r in results])
    if scores.size > 1:
        n_violations = int(np.sum(np.diff(scores) > 0))
        if n_violations:
            issues.append(f"Ranking not sorted by score: {n_violations} ordering violations")

    if issues:
        logger.warning(f"Ranking sanity check found {len(issues)} issues")
    return issues
