"""Vote statistics for the results and admin pages.

Predictions are plain rows as returned by the backend:
    {"voter_id", "target_id", "modules", "rattrapages", "votes_data"?}
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserStats:
    """Averages of the predictions received by one student."""

    total_votes: int
    avg_modules: float
    avg_rattrapages: float


@dataclass(frozen=True)
class GlobalStats:
    """Admin overview across all predictions."""

    total_votes: int
    total_users: int
    most_voted_user: str | None
    most_voted_count: int
    avg_modules: float
    avg_rattrapages: float


@dataclass
class ModuleTally:
    """Per-module count of "validated" vs "retake" votes."""

    validated: int = 0
    retake: int = 0

    @property
    def total(self) -> int:
        return self.validated + self.retake

    @property
    def validated_rate(self) -> float:
        return self.validated / self.total if self.total > 0 else 0.0


def _average(values: Sequence[float]) -> float:
    """Mean rounded to one decimal, halves away from zero (2.25 -> 2.3)"""
    if not values:
        return 0.0
    mean = Decimal(sum(values) / len(values))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def calculate_user_stats(predictions: Sequence[Mapping[str, Any]]) -> UserStats:
    """Average the predictions a student received.

    Args:
        predictions: Rows targeting one student

    Returns:
        UserStats with averages rounded to one decimal (zeros when empty)
    """
    return UserStats(
        total_votes=len(predictions),
        avg_modules=_average([p["modules"] for p in predictions]),
        avg_rattrapages=_average([p["rattrapages"] for p in predictions]),
    )


def calculate_global_stats(
    predictions: Sequence[Mapping[str, Any]],
    profiles: Sequence[Mapping[str, Any]],
) -> GlobalStats:
    """Compute the admin overview.

    Args:
        predictions: Every prediction row
        profiles: Every profile row ({id, full_name, ...})

    Returns:
        GlobalStats; the most voted user is the target with the most
        predictions (first seen wins ties), None when there are no votes
    """
    if not predictions:
        return GlobalStats(0, len(profiles), None, 0, 0.0, 0.0)

    votes_by_target = Counter(p["target_id"] for p in predictions)
    most_voted_id, most_voted_count = votes_by_target.most_common(1)[0]
    names = {p.get("id"): p.get("full_name") for p in profiles}

    return GlobalStats(
        total_votes=len(predictions),
        total_users=len(profiles),
        most_voted_user=names.get(most_voted_id),
        most_voted_count=most_voted_count,
        avg_modules=_average([p["modules"] for p in predictions]),
        avg_rattrapages=_average([p["rattrapages"] for p in predictions]),
    )


def parse_votes_data(raw: Any) -> dict[str, str]:
    """Decode the optional per-module vote details.

    The column holds either a JSON string or an already-decoded object.
    Invalid content yields {}.
    """
    if raw is None:
        return {}
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            logger.debug(f"Ignoring undecodable votes_data: {raw[:50]!r}")
            return {}
    if not isinstance(raw, Mapping):
        return {}
    return {str(module): str(choice) for module, choice in raw.items()}


def summarize_module_votes(predictions: Iterable[Mapping[str, Any]]) -> dict[str, ModuleTally]:
    """Tally "validated" vs "retake" per module across predictions."""
    tallies: dict[str, ModuleTally] = {}
    for prediction in predictions:
        for module, choice in parse_votes_data(prediction.get("votes_data")).items():
            tally = tallies.setdefault(module, ModuleTally())
            if choice == "validated":
                tally.validated += 1
            elif choice == "retake":
                tally.retake += 1
    return tallies
