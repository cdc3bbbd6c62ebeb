"""
Command-line runner for ranking a profile export.

Usage:
    python -m matchmaking.run --profiles data/profiles.csv --subject user-001

The runner performs the following steps:
1. Load configuration (optional YAML file)
2. Load profiles and locate the subject
3. Restrict the candidate pool to the configured roles
4. Rank candidates against the subject
5. Report a summary and optionally write the ranked matches
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Any, List, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def run_matching(
    profiles_path: Optional[str],
    subject_id: str,
    config_path: Optional[str] = None,
    roles: Optional[List[str]] = None,
    limit: Optional[int] = None,
    output_path: Optional[str] = None,
    log_level: Optional[str] = None
) -> Dict[str, Any]:
    """
    Rank the profiles of an export against one subject.

    Args:
        profiles_path: Profile export (.csv/.json/.yaml); falls back to data.profiles.path
        subject_id: Id of the profile requesting matches
        config_path: Optional YAML configuration file
        roles: Candidate roles to keep (overrides data.roles); empty keeps all
        limit: Maximum number of matches to return (overrides output.limit)
        output_path: Optional .csv or .json destination for the ranked matches
        log_level: Log level (overrides global.log_level)

    Returns:
        Dictionary with the ranked results, the summary and any sanity issues

    Raises:
        FileNotFoundError: If the config or profiles file is missing
        KeyError: If the subject id is not in the export
        ValueError: If the configuration or profiles are malformed
    """
    from .configs import load_config, validate_config, get_config_value, MatchConfig
    from .data_loading import load_profiles, filter_by_role
    from .matching import rank_matches
    from .evaluation import summarize_matches, results_to_frame, sanity_check_ranking

    # =========================================================================
    # 1. Configuration
    # =========================================================================
    config: Dict[str, Any] = {}
    if config_path:
        config = load_config(config_path)
        for issue in validate_config(config):
            logger.warning(f"Config issue: {issue}")

    setup_logging(log_level or get_config_value(config, "global.log_level", "INFO"))

    match_config = MatchConfig.from_config(config)
    match_config.validate()

    profiles_path = profiles_path or get_config_value(config, "data.profiles.path")
    if not profiles_path:
        raise ValueError("No profiles file given (use --profiles or data.profiles.path)")
    if roles is None:
        roles = get_config_value(config, "data.roles", [])
    if limit is None:
        limit = get_config_value(config, "output.limit")

    # =========================================================================
    # 2. Profiles
    # =========================================================================
    profiles = load_profiles(profiles_path)
    subject = next((p for p in profiles if p.id == subject_id), None)
    if subject is None:
        raise KeyError(f"Subject {subject_id!r} not found in {profiles_path}")

    candidates = filter_by_role(profiles, roles)
    logger.info(f"Candidate pool: {len(candidates)} of {len(profiles)} profiles (roles={roles or 'all'})")

    # =========================================================================
    # 3. Ranking
    # =========================================================================
    results = rank_matches(subject, candidates, match_config, limit=limit)

    summary = summarize_matches(subject.id, results, n_candidates=len(candidates))
    for line in summary.summary().splitlines():
        logger.info(line)

    issues = sanity_check_ranking(results, subject_id=subject.id, config=match_config)
    for issue in issues:
        logger.warning(f"Sanity check: {issue}")

    # =========================================================================
    # 4. Output
    # =========================================================================
    if output_path:
        _write_results(results, summary, output_path)

    return {
        "results": results,
        "summary": summary,
        "issues": issues,
        "frame": results_to_frame(results),
    }


def _write_results(results, summary, output_path: str) -> None:
    """Write ranked results as CSV (flat table) or JSON (with summary)."""
    from .evaluation import results_to_frame

    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.suffix.lower() == ".csv":
        results_to_frame(results).to_csv(path, index=False)
    elif path.suffix.lower() == ".json":
        payload = {
            "summary": summary.to_dict(),
            "matches": [r.to_dict() for r in results],
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
    else:
        raise ValueError(f"Unsupported output format: {path.suffix}")

    logger.info(f"Wrote {len(results)} matches to {output_path}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the runner."""
    parser = argparse.ArgumentParser(
        description="Rank member profiles by business compatibility"
    )
    parser.add_argument(
        "--profiles",
        type=str,
        default=None,
        help="Path to the profiles export (.csv, .json, .yaml)"
    )
    parser.add_argument(
        "--subject",
        type=str,
        required=True,
        help="Id of the profile to find matches for"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--roles",
        type=str,
        nargs="*",
        default=None,
        help="Candidate roles to keep (overrides config; no values keeps all)"
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of matches to report"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write ranked matches to this .csv or .json file"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (overrides config)"
    )

    args = parser.parse_args(argv)

    try:
        result = run_matching(
            args.profiles,
            args.subject,
            config_path=args.config,
            roles=args.roles,
            limit=args.limit,
            output_path=args.output,
            log_level=args.log_level,
        )
    except (FileNotFoundError, KeyError, ValueError) as e:
        logger.error(f"Matching failed: {e}")
        return 1

    frame = result["frame"]
    if frame.empty:
        print("No matches found.")
    else:
        print(frame[["rank", "profile_id", "name", "score", "match_type"]].to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
