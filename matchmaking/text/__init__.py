"""Text normalization and lexical overlap scoring."""

from .tokenizer import tokenize, tokenize_ordered
from .overlap import OverlapResult, text_overlap_score, overlap_from_tokens, round_half_up

__all__ = [
    "tokenize",
    "tokenize_ordered",
    "OverlapResult",
    "text_overlap_score",
    "overlap_from_tokens",
    "round_half_up",
]
