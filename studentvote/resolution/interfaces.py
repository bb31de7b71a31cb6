"""Result types for name resolution against the roster."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..roster.models import RosterEntry

EMPTY_NAME_REASON = "Empty name"
EXACT_COLLISION_REASON = "Several students match this name exactly. Contact an administrator."
MAX_SAMPLE_CANDIDATES = 3


class MatchStatus(Enum):
    """Outcome of a resolution attempt"""

    FOUND = "found"
    AMBIGUOUS = "ambiguous"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class MatchResult:
    """Result of resolving one name query against the roster.

    Exactly one of the shapes holds:
    - FOUND: `entry` is set, `candidates` is empty
    - AMBIGUOUS: `entry` is None, `candidates` holds every matching entry
    - NOT_FOUND: `entry` is None, `candidates` is empty; `reason` is set only
      for an empty query
    """

    status: MatchStatus
    entry: RosterEntry | None = None
    candidates: tuple[RosterEntry, ...] = field(default_factory=tuple)
    reason: str | None = None
    method: str | None = None

    @classmethod
    def found(cls, entry: RosterEntry, method: str) -> MatchResult:
        return cls(status=MatchStatus.FOUND, entry=entry, method=method)

    @classmethod
    def ambiguous(cls, candidates: list[RosterEntry], reason: str, method: str) -> MatchResult:
        return cls(status=MatchStatus.AMBIGUOUS, candidates=tuple(candidates), reason=reason, method=method)

    @classmethod
    def not_found(cls, reason: str | None = None) -> MatchResult:
        return cls(status=MatchStatus.NOT_FOUND, reason=reason)

    @property
    def is_resolved(self) -> bool:
        """Check if resolution was successful"""
        return self.status is MatchStatus.FOUND

    @property
    def is_ambiguous(self) -> bool:
        """Check if multiple candidates were found"""
        return self.status is MatchStatus.AMBIGUOUS

    @property
    def sample_names(self) -> list[str]:
        """Up to three candidate full names to help narrow the query"""
        return [c.full_name for c in self.candidates[:MAX_SAMPLE_CANDIDATES]]
