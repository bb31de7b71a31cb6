"""Admin-controlled settings stored in the backend `settings` table.

Rows are `{key, value}` with string values; flags are on only for "true"."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

VOTING_ENABLED_KEY = "voting_enabled"
ANONYMOUS_VOTES_KEY = "anonymous_votes"
SHOW_RESULTS_KEY = "show_results"
MODULES_LIST_KEY = "modules_list"

DEFAULT_MODULES: tuple[str, ...] = (
    "Analyse",
    "Algèbre",
    "Probabilités",
    "Statistiques",
    "Informatique",
    "Physique",
    "Anglais",
    "Communication",
)


def parse_modules_list(raw: str | None) -> list[str]:
    """Decode the `modules_list` setting.

    Args:
        raw: JSON array of module names, or None when unset

    Returns:
        Module names, or DEFAULT_MODULES when unset or malformed
    """
    if not raw:
        return list(DEFAULT_MODULES)
    try:
        modules = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("modules_list setting is not valid JSON, using defaults")
        return list(DEFAULT_MODULES)
    if not isinstance(modules, list) or not all(isinstance(m, str) for m in modules):
        logger.warning("modules_list setting is not a list of names, using defaults")
        return list(DEFAULT_MODULES)
    return modules


@dataclass(frozen=True)
class AppSettings:
    """Snapshot of the settings table."""

    values: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, Any]]) -> AppSettings:
        return cls(values={row["key"]: row.get("value") for row in rows})

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def flag(self, key: str) -> bool:
        return self.values.get(key) == "true"

    @property
    def voting_enabled(self) -> bool:
        return self.flag(VOTING_ENABLED_KEY)

    @property
    def anonymous_votes(self) -> bool:
        return self.flag(ANONYMOUS_VOTES_KEY)

    @property
    def show_results(self) -> bool:
        return self.flag(SHOW_RESULTS_KEY)

    @property
    def modules(self) -> list[str]:
        return parse_modules_list(self.values.get(MODULES_LIST_KEY))
