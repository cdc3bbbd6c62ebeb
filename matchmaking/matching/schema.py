"""
Data structures consumed and produced by the matching engine.

Profiles are owned by the profile-management layer and are read-only here.
Every field besides ``id`` is optional; None or empty means "no signal" and
simply contributes zero to the score.

MatchReason and MatchResult are created fresh for every ranking request
and never persisted.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Optional, Dict, Any, List

import pandas as pd


def is_missing(value: Any) -> bool:
    """True for None and pandas/float NaN scalars."""
    if value is None:
        return True
    if isinstance(value, (list, tuple)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


class ReasonType(Enum):
    """Compatibility dimension behind a match reason, in evaluation order."""
    SELLS_NEEDS = "SELLS_NEEDS"    # Candidate sells what the subject needs
    NEEDS_SELLS = "NEEDS_SELLS"    # Subject sells what the candidate needs
    SECTOR = "SECTOR"              # Shared partnership interests
    TAG = "TAG"                    # Shared free-form tags


class MatchType(Enum):
    """Ordinal match tier derived from the final score."""
    STRONG = "STRONG"
    COMMON = "COMMON"
    POTENTIAL = "POTENTIAL"
    NONE = "NONE"

    @property
    def rank(self) -> int:
        """Ordinal position, NONE=0 up to STRONG=3."""
        return _MATCH_TYPE_RANKS[self]


_MATCH_TYPE_RANKS = {
    MatchType.NONE: 0,
    MatchType.POTENTIAL: 1,
    MatchType.COMMON: 2,
    MatchType.STRONG: 3,
}

_TEXT_FIELDS = ["what_i_sell", "what_i_need", "name", "company", "role"]
_LABEL_FIELDS = ["partnership_interests", "tags"]


@dataclass
class Profile:
    """
    A member's professional profile.

    Attributes:
        id: Unique member identifier
        what_i_sell: Free text describing what the member sells or does
        what_i_need: Free text describing what the member needs or would buy
        partnership_interests: Sector labels the member wants to partner in
        tags: Free-form interest labels
        name: Display name (not scored)
        company: Company name (not scored)
        role: Membership role, used by callers for filtering (not scored)
    """
    id: str
    what_i_sell: Optional[str] = None
    what_i_need: Optional[str] = None
    partnership_interests: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    name: Optional[str] = None
    company: Optional[str] = None
    role: Optional[str] = None

    def __post_init__(self):
        """Reject malformed values at the boundary."""
        if not isinstance(self.id, str) or not self.id:
            raise ValueError(f"id must be a non-empty string, got {self.id!r}")

        for attr in _TEXT_FIELDS:
            val = getattr(self, attr)
            if val is not None and not isinstance(val, str):
                raise ValueError(f"{attr} must be a string or None, got {type(val)}")

        for attr in _LABEL_FIELDS:
            val = getattr(self, attr)
            if val is None:
                continue
            if isinstance(val, str) or not isinstance(val, (list, tuple)):
                raise ValueError(f"{attr} must be a list of strings or None, got {type(val)}")
            if not all(isinstance(label, str) for label in val):
                raise ValueError(f"{attr} must contain only strings")
            setattr(self, attr, list(val))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Profile":
        """
        Create from dictionary, ignoring keys the engine does not use.

        None and NaN (as produced by pandas for empty cells) both mean
        "no signal".
        """
        known = {f.name for f in fields(cls)}
        return cls(**{
            k: (None if is_missing(v) else v)
            for k, v in data.items() if k in known
        })


@dataclass
class MatchReason:
    """
    One dimension that contributed to a match.

    Attributes:
        type: Dimension that produced this reason
        label: Fixed human-readable label for the dimension
        detail: Matched keywords or labels joined for display
        points: Contribution to the total score
        matched: The matched keywords or labels before joining
    """
    type: ReasonType
    label: str
    detail: str
    points: int
    matched: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with string values."""
        return {
            "type": self.type.value,
            "label": self.label,
            "detail": self.detail,
            "points": self.points,
            "matched": list(self.matched),
        }


@dataclass
class MatchResult:
    """
    Compatibility of one candidate with the subject.

    Attributes:
        profile: The candidate profile (by reference)
        score: Final score in [0, 100]
        match_type: Tier derived from score
        reasons: Contributing dimensions in evaluation order
    """
    profile: Profile
    score: int
    match_type: MatchType
    reasons: List[MatchReason] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary; the profile is referenced by id."""
        return {
            "profile_id": self.profile.id,
            "name": self.profile.name,
            "score": self.score,
            "match_type": self.match_type.value,
            "reasons": [r.to_dict() for r in self.reasons],
        }
