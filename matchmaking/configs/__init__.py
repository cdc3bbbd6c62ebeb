"""Configuration loading and matcher parameters."""

from .loader import load_config, validate_config, get_config_value
from .match_config import MatchConfig, DEFAULT_STOPWORDS, DEFAULT_REASON_LABELS

__all__ = [
    "load_config",
    "validate_config",
    "get_config_value",
    "MatchConfig",
    "DEFAULT_STOPWORDS",
    "DEFAULT_REASON_LABELS",
]
