"""
Data loading functions for member profiles.

This module reads profile exports (CSV, JSON or YAML) into Profile objects
for offline ranking runs. The matching engine itself never performs I/O;
these loaders sit in front of it in the same way the profile service does
in production.

Label columns (``partnership_interests``, ``tags``) may be lists (JSON/YAML)
or ``;``-separated strings (CSV).
"""

import logging
import numbers
from pathlib import Path
from typing import Any, Iterable, List, Optional

import pandas as pd
import yaml

from ..matching.schema import Profile, is_missing

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["id"]
TEXT_COLUMNS = ["what_i_sell", "what_i_need", "name", "company", "role"]
LABEL_COLUMNS = ["partnership_interests", "tags"]
LABEL_SEPARATOR = ";"


def load_profiles_frame(filepath: str) -> pd.DataFrame:
    """
    Load a profile export into a DataFrame.

    Args:
        filepath: Path to a .csv, .json, .yaml or .yml file

    Returns:
        DataFrame with one row per profile

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the format is unsupported or the file has no rows
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Profiles file not found: {filepath}")

    suffix = path.suffix.lower()
    logger.info(f"Loading profiles from {filepath}")

    if suffix == ".csv":
        # Keep ids and free text as strings; blanks become NaN
        df = pd.read_csv(path, dtype=str)
    elif suffix == ".json":
        df = pd.read_json(path, orient="records", dtype=False)
    elif suffix in (".yaml", ".yml"):
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if isinstance(data, dict):
            data = data.get("profiles", [])
        df = pd.DataFrame(data or [])
    else:
        raise ValueError(f"Unsupported profiles format: {suffix}")

    if df.empty:
        raise ValueError(f"Profiles file is empty: {filepath}")

    logger.info(f"Loaded {len(df)} rows with {len(df.columns)} columns")
    return df


def validate_profile_columns(df: pd.DataFrame) -> List[str]:
    """
    Check that the DataFrame has the columns needed to build profiles.

    Args:
        df: Profiles DataFrame

    Returns:
        List of missing required columns (empty if valid)
    """
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]

    optional = TEXT_COLUMNS + LABEL_COLUMNS
    absent = [col for col in optional if col not in df.columns]
    if absent:
        logger.info(f"Optional columns not present (treated as empty): {absent}")

    return missing


def frame_to_profiles(df: pd.DataFrame) -> List[Profile]:
    """
    Convert a profiles DataFrame into Profile objects.

    Args:
        df: DataFrame with at least an ``id`` column

    Returns:
        List of Profile in row order

    Raises:
        ValueError: If required columns are missing or a row is malformed
    """
    missing = validate_profile_columns(df)
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    profiles = []
    for idx, row in enumerate(df.to_dict(orient="records")):
        try:
            profiles.append(Profile(
                id=_clean_id(row.get("id")),
                **{col: _clean_text(row.get(col)) for col in TEXT_COLUMNS},
                **{col: _clean_labels(row.get(col)) for col in LABEL_COLUMNS},
            ))
        except ValueError as e:
            raise ValueError(f"Invalid profile at row {idx}: {e}") from e

    return profiles


def load_profiles(filepath: str) -> List[Profile]:
    """Load a profile export straight into Profile objects."""
    profiles = frame_to_profiles(load_profiles_frame(filepath))
    logger.info(f"Built {len(profiles)} profiles")
    return profiles


def filter_by_role(profiles: Iterable[Profile], roles: Optional[Iterable[str]]) -> List[Profile]:
    """
    Keep profiles whose role is in ``roles``.

    An empty or missing ``roles`` keeps every profile.
    """
    allowed = set(roles or [])
    if not allowed:
        return list(profiles)
    return [p for p in profiles if p.role in allowed]


def _clean_id(value: Any) -> Any:
    if is_missing(value):
        return None
    # JSON exports may carry numeric ids
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return str(int(value)) if float(value).is_integer() else str(value)
    return value


def _clean_text(value: Any) -> Any:
    if is_missing(value):
        return None
    return value


def _clean_labels(value: Any) -> Any:
    if is_missing(value):
        return None
    if isinstance(value, str):
        labels = [label.strip() for label in value.split(LABEL_SEPARATOR)]
        return [label for label in labels if label]
    return value
