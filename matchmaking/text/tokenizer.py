"""
Free-text normalization into comparable tokens.

Pipeline applied to a text field:
    lowercase -> NFD decomposition -> strip combining marks
    -> punctuation to spaces -> split on whitespace
    -> drop short tokens -> drop stopwords

"Gestão", "gestao" and "GESTÃO!" therefore all yield the token "gestao".
"""

import re
from typing import List, Optional, Set

from ..configs.match_config import MatchConfig, fold_accents

_NON_WORD = re.compile(r"[^\w\s]")


def _normalize(text: str) -> str:
    """Lowercase, strip diacritics and replace punctuation with spaces."""
    return _NON_WORD.sub(" ", fold_accents(text))


def tokenize_ordered(text: Optional[str], config: Optional[MatchConfig] = None) -> List[str]:
    """
    Tokenize text, keeping the order of first appearance.

    Args:
        text: Free text, may be None or empty
        config: Matcher configuration (stopwords, minimum token length)

    Returns:
        Unique tokens in the order they first occur
    """
    if not text:
        return []
    config = config or MatchConfig()

    # dict preserves insertion order and collapses duplicates
    tokens = dict.fromkeys(
        word for word in _normalize(text).split()
        if len(word) >= config.min_token_length and word not in config.stopwords
    )
    return list(tokens)


def tokenize(text: Optional[str], config: Optional[MatchConfig] = None) -> Set[str]:
    """
    Tokenize text into a set of normalized tokens.

    None or empty input yields an empty set.
    """
    return set(tokenize_ordered(text, config))
