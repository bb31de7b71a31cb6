"""Name resolution: tokenizer, result types and the two-pass matcher."""

from .interfaces import MatchResult, MatchStatus
from .matcher import NameMatcher, resolve
from .tokenizer import tokenize_name

__all__ = [
    "MatchResult",
    "MatchStatus",
    "NameMatcher",
    "resolve",
    "tokenize_name",
]
