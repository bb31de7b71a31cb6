"""Two-pass name matcher.

Resolves a free-text name to one roster entry:

1. Exact permutation: the entry has as many tokens as the query and contains
   every query token. "Bilal Mouttali" finds "MOUTTALI BILAL".
2. Subset (only when pass 1 found nothing): the entry contains every query
   token, whatever its length. "Mouttali" finds "MOUTTALI BILAL" when unique.

Collisions are never broken arbitrarily: several exact matches are a data
problem for an administrator, several subset matches ask the user to be more
specific."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..roster.models import RosterEntry
from .interfaces import (
    EMPTY_NAME_REASON,
    EXACT_COLLISION_REASON,
    MAX_SAMPLE_CANDIDATES,
    MatchResult,
)
from .tokenizer import tokenize_name

logger = logging.getLogger(__name__)

EXACT_METHOD = "exact_permutation"
SUBSET_METHOD = "subset"


class NameMatcher:
    """Resolves names against an injected, read-only roster.

    Entry names are tokenized once at construction.
    """

    def __init__(self, roster: Iterable[RosterEntry]):
        entries: list[tuple[RosterEntry, frozenset[str], int]] = []
        for entry in roster:
            tokens = tokenize_name(entry.full_name)
            entries.append((entry, frozenset(tokens), len(tokens)))
        self._entries = tuple(entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def roster(self) -> tuple[RosterEntry, ...]:
        return tuple(entry for entry, _, _ in self._entries)

    def resolve(self, query: str | None) -> MatchResult:
        """Resolve a name query.

        Args:
            query: Free-text name as typed by the user

        Returns:
            MatchResult (found, ambiguous or not_found)
        """
        tokens = tokenize_name(query)
        if not tokens:
            return MatchResult.not_found(EMPTY_NAME_REASON)

        query_set = set(tokens)

        # Equal count + containment is set equality whenever the query has no repeated token
        exact = [entry for entry, entry_set, count in self._entries if count == len(tokens) and query_set <= entry_set]
        if len(exact) == 1:
            logger.debug(f"Exact match for {tokens}: {exact[0].registration_id}")
            return MatchResult.found(exact[0], EXACT_METHOD)
        if exact:
            logger.warning(f"{len(exact)} roster entries share the tokens {sorted(query_set)}")
            return MatchResult.ambiguous(exact, EXACT_COLLISION_REASON, EXACT_METHOD)

        subset = [entry for entry, entry_set, _ in self._entries if query_set <= entry_set]
        if len(subset) == 1:
            logger.debug(f"Subset match for {tokens}: {subset[0].registration_id}")
            return MatchResult.found(subset[0], SUBSET_METHOD)
        if subset:
            samples = ", ".join(entry.full_name for entry in subset[:MAX_SAMPLE_CANDIDATES])
            reason = f"Several students found ({len(subset)}). Be more specific (e.g. {samples}...)"
            return MatchResult.ambiguous(subset, reason, SUBSET_METHOD)

        return MatchResult.not_found()


def resolve(query: str | None, roster: Iterable[RosterEntry]) -> MatchResult:
    """Resolve a query against a roster without keeping a matcher around."""
    return NameMatcher(roster).resolve(query)
