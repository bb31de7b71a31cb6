"""Name tokenization for roster matching."""

from __future__ import annotations

import re
import unicodedata

_DISALLOWED = re.compile(r"[^A-Z0-9\s]")


def strip_accents(text: str) -> str:
    """Decompose to NFD and drop combining marks.

    Examples:
        "Bílàl" -> "Bilal"
        "ÉLODIE" -> "ELODIE"
    """
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def tokenize_name(name: str | None) -> list[str]:
    """Normalize a free-text name into uppercase alphanumeric tokens.

    1. Strip leading/trailing whitespace
    2. Convert to uppercase
    3. Strip diacritics
    4. Remove everything outside A-Z, 0-9 and whitespace
    5. Split on whitespace runs, dropping empty tokens

    Token order follows the input; matching treats them as a set.

    Args:
        name: The name to tokenize (None and blank input give [])

    Returns:
        List of tokens
    """
    if not name:
        return []
    cleaned = _DISALLOWED.sub("", strip_accents(name.strip().upper()))
    return cleaned.split()


def join_tokens(tokens: list[str]) -> str:
    """Rejoin tokens into a canonical display string."""
    return " ".join(tokens)
