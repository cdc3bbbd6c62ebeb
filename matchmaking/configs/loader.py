"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
checks that the values the matcher reads are well-formed.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import yaml

from .match_config import is_number

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file is empty
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(filepath, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    if "matching" not in config:
        issues.append("Missing section: matching (defaults will be used)")

    log_level = get_config_value(config, "global.log_level")
    if log_level is not None and str(log_level).upper() not in VALID_LOG_LEVELS:
        issues.append(f"Unknown global.log_level: {log_level}")

    matching = config.get("matching") or {}
    if not isinstance(matching, dict):
        issues.append("matching must be a mapping")
        return issues

    # Weights apply to raw overlap scores
    dimensions = matching.get("dimensions") or {}
    for name in ["sells_needs", "needs_sells"]:
        weight = (dimensions.get(name) or {}).get("weight")
        if weight is None:
            continue
        if not is_number(weight):
            issues.append(f"matching.dimensions.{name}.weight must be a number, got {weight!r}")
        elif weight < 0:
            issues.append(f"matching.dimensions.{name}.weight must be non-negative, got {weight}")

    # Tier thresholds must be numbers and ordered
    classification = matching.get("classification") or {}
    thresholds = {}
    for name, default in [("potential", 10), ("common", 40), ("strong", 70), ("max_score", 100)]:
        value = classification.get(name, default)
        if not is_number(value):
            issues.append(f"matching.classification.{name} must be a number, got {value!r}")
        thresholds[name] = value
    if all(is_number(v) for v in thresholds.values()):
        if not thresholds["potential"] <= thresholds["common"] <= thresholds["strong"]:
            issues.append(
                f"Classification thresholds out of order: "
                f"potential={thresholds['potential']}, common={thresholds['common']}, "
                f"strong={thresholds['strong']}"
            )

    stopwords = (matching.get("tokenizer") or {}).get("stopwords")
    if stopwords is not None and not isinstance(stopwords, list):
        issues.append("matching.tokenizer.stopwords must be a list")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "matching.dimensions.sector.cap")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value
