"""
Tunable parameters for the matching engine.

Every constant the scoring algorithm depends on lives in a single
dataclass, so behavior can be adjusted from YAML without touching the
control flow of the tokenizer, overlap scorer, aggregator or classifier.

Defaults reproduce the production scoring rules:

    SELLS_NEEDS  weight 1.0, cap 50  (raw overlap must exceed 5)
    NEEDS_SELLS  weight 0.7, cap 35  (raw overlap must exceed 5)
    SECTOR       10 per shared label, cap 30
    TAG          5 per shared label, cap 20
    Tiers        STRONG >= 70, COMMON >= 40, POTENTIAL >= 10
"""

import json
import logging
import numbers
import unicodedata
from dataclasses import dataclass, field, asdict
from typing import Dict, Any, FrozenSet

logger = logging.getLogger(__name__)

NUMERIC_FIELDS = [
    "min_token_length", "overlap_scale", "overlap_cap", "max_keywords",
    "text_min_raw_score", "sells_needs_weight", "sells_needs_cap",
    "needs_sells_weight", "needs_sells_cap", "sector_points", "sector_cap",
    "sector_detail_limit", "tag_points", "tag_cap", "tag_detail_limit",
    "max_score", "strong_threshold", "common_threshold", "potential_threshold",
]


def is_number(value: Any) -> bool:
    """True for ints and floats, False for bools, None and strings."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def fold_accents(text: str) -> str:
    """Lowercase, decompose (NFD) and drop combining marks."""
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


# High-frequency pt-BR connector words, already accent-stripped.
DEFAULT_STOPWORDS = frozenset([
    "que", "para", "com", "por", "uma", "uns", "umas", "como",
    "mais", "mas", "seu", "sua", "nos", "nas", "dos", "das",
    "este", "essa", "isso", "ser", "ter", "fazer", "pode",
    "todo", "toda", "todos", "todas", "muito", "muita", "muitos",
    "vou", "vai", "vamos", "foram", "sobre", "entre", "quando",
    "onde", "quem", "qual", "quais", "estou", "esta", "esse",
    "tambem", "ainda", "apenas", "desde", "ate", "sem", "num",
    "numa", "cada", "mesmo", "mesma", "nao", "sim", "bem",
])

DEFAULT_REASON_LABELS = {
    "SELLS_NEEDS": "Oferece o que você precisa",
    "NEEDS_SELLS": "Você oferece o que ele precisa",
    "SECTOR": "Setores em comum",
    "TAG": "Interesses em comum",
}


@dataclass
class MatchConfig:
    """
    Configuration for compatibility scoring.

    Attributes:
        stopwords: Tokens discarded by the tokenizer (accent-stripped, lowercase)
        min_token_length: Shortest token kept by the tokenizer
        overlap_scale: Multiplier applied to the Jaccard similarity
        overlap_cap: Upper bound of a single text overlap score
        max_keywords: Matched keywords kept per text dimension
        text_min_raw_score: Raw overlap score must exceed this to count
        sells_needs_weight / sells_needs_cap: "They sell what I need" dimension
        needs_sells_weight / needs_sells_cap: "I sell what they need" dimension
        sector_points / sector_cap / sector_detail_limit: Shared sectors
        tag_points / tag_cap / tag_detail_limit: Shared tags
        max_score: Clamp for the summed score
        strong_threshold / common_threshold / potential_threshold: Tier lower bounds
        detail_separator: Joins matched keywords for display
        reason_labels: Human-readable label per reason type
    """
    stopwords: FrozenSet[str] = field(default_factory=lambda: DEFAULT_STOPWORDS)
    min_token_length: int = 3

    overlap_scale: float = 150.0
    overlap_cap: int = 50
    max_keywords: int = 5
    text_min_raw_score: int = 5

    sells_needs_weight: float = 1.0
    sells_needs_cap: int = 50
    needs_sells_weight: float = 0.7
    needs_sells_cap: int = 35

    sector_points: int = 10
    sector_cap: int = 30
    sector_detail_limit: int = 3

    tag_points: int = 5
    tag_cap: int = 20
    tag_detail_limit: int = 4

    max_score: int = 100
    strong_threshold: int = 70
    common_threshold: int = 40
    potential_threshold: int = 10

    detail_separator: str = " · "
    reason_labels: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_REASON_LABELS))

    def __post_init__(self):
        """Fold stopwords the same way tokens are folded."""
        if self.stopwords is None or isinstance(self.stopwords, str):
            raise ValueError(f"stopwords must be a list of strings, got {self.stopwords!r}")
        if not all(isinstance(word, str) for word in self.stopwords):
            raise ValueError("stopwords must contain only strings")
        self.stopwords = frozenset(fold_accents(word).strip() for word in self.stopwords)

    def validate(self) -> None:
        """Validate configuration values."""
        for name in NUMERIC_FIELDS:
            if not is_number(getattr(self, name)):
                raise ValueError(f"{name} must be a number, got {getattr(self, name)!r}")

        if self.min_token_length < 1:
            raise ValueError(f"min_token_length must be >= 1, got {self.min_token_length}")
        if self.overlap_scale <= 0:
            raise ValueError(f"overlap_scale must be positive, got {self.overlap_scale}")
        if self.max_keywords < 1:
            raise ValueError(f"max_keywords must be >= 1, got {self.max_keywords}")

        for name in ["sells_needs_weight", "needs_sells_weight"]:
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

        for name in ["overlap_cap", "sells_needs_cap", "needs_sells_cap", "sector_points",
                     "sector_cap", "tag_points", "tag_cap", "max_score"]:
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

        if not (0 <= self.potential_threshold <= self.common_threshold
                <= self.strong_threshold <= self.max_score):
            raise ValueError(
                "Thresholds must satisfy 0 <= potential <= common <= strong <= max_score, got "
                f"{self.potential_threshold}/{self.common_threshold}/"
                f"{self.strong_threshold}/{self.max_score}"
            )

        missing = set(DEFAULT_REASON_LABELS) - set(self.reason_labels)
        if missing:
            raise ValueError(f"Missing reason labels for: {sorted(missing)}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        d = asdict(self)
        d["stopwords"] = sorted(self.stopwords)
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "MatchConfig":
        """Create from dictionary."""
        return cls(**d)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "MatchConfig":
        """
        Create from main config dictionary.

        Reads the nested ``matching`` section; any key left out keeps its
        default value.

        Args:
            config: Main config dictionary

        Returns:
            MatchConfig instance
        """
        matching = config.get("matching", {}) or {}
        tokenizer = matching.get("tokenizer", {}) or {}
        overlap = matching.get("overlap", {}) or {}
        dimensions = matching.get("dimensions", {}) or {}
        sells_needs = dimensions.get("sells_needs", {}) or {}
        needs_sells = dimensions.get("needs_sells", {}) or {}
        sector = dimensions.get("sector", {}) or {}
        tag = dimensions.get("tag", {}) or {}
        classification = matching.get("classification", {}) or {}

        defaults = cls()
        labels = dict(defaults.reason_labels)
        labels.update(matching.get("reason_labels", {}) or {})

        return cls(
            stopwords=tokenizer.get("stopwords", defaults.stopwords),
            min_token_length=tokenizer.get("min_token_length", defaults.min_token_length),
            overlap_scale=overlap.get("scale", defaults.overlap_scale),
            overlap_cap=overlap.get("cap", defaults.overlap_cap),
            max_keywords=overlap.get("max_keywords", defaults.max_keywords),
            text_min_raw_score=overlap.get("min_raw_score", defaults.text_min_raw_score),
            sells_needs_weight=sells_needs.get("weight", defaults.sells_needs_weight),
            sells_needs_cap=sells_needs.get("cap", defaults.sells_needs_cap),
            needs_sells_weight=needs_sells.get("weight", defaults.needs_sells_weight),
            needs_sells_cap=needs_sells.get("cap", defaults.needs_sells_cap),
            sector_points=sector.get("points", defaults.sector_points),
            sector_cap=sector.get("cap", defaults.sector_cap),
            sector_detail_limit=sector.get("detail_limit", defaults.sector_detail_limit),
            tag_points=tag.get("points", defaults.tag_points),
            tag_cap=tag.get("cap", defaults.tag_cap),
            tag_detail_limit=tag.get("detail_limit", defaults.tag_detail_limit),
            max_score=classification.get("max_score", defaults.max_score),
            strong_threshold=classification.get("strong", defaults.strong_threshold),
            common_threshold=classification.get("common", defaults.common_threshold),
            potential_threshold=classification.get("potential", defaults.potential_threshold),
            detail_separator=matching.get("detail_separator", defaults.detail_separator),
            reason_labels=labels,
        )

    def save(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info(f"Saved match config to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "MatchConfig":
        """Load configuration from JSON file."""
        with open(filepath, "r", encoding="utf-8") as f:
            d = json.load(f)
        return cls.from_dict(d)
