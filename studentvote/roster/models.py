"""Roster domain model.

A roster entry is the canonical student record a signup name resolves to.
Entries are read once at startup and never mutated."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RosterEntry:
    """One student of the reference roster"""

    full_name: str
    registration_id: str  # "matricule"
    group: str | None = None  # "gp"
    subgroup: str | None = None  # "sgp"

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> RosterEntry:
        """Build an entry from a raw `{nom, matricule, gp, sgp}` record.

        Raises:
            KeyError: If `nom` or `matricule` is missing or blank
        """
        full_name = str(record.get("nom") or "").strip()
        registration_id = str(record.get("matricule") or "").strip()
        if not full_name:
            raise KeyError("nom")
        if not registration_id:
            raise KeyError("matricule")

        group = record.get("gp")
        subgroup = record.get("sgp")
        return cls(
            full_name=full_name,
            registration_id=registration_id,
            group=str(group) if group is not None else None,
            subgroup=str(subgroup) if subgroup is not None else None,
        )

    def to_record(self) -> dict[str, Any]:
        """Convert back to the dataset's field names."""
        return {
            "nom": self.full_name,
            "matricule": self.registration_id,
            "gp": self.group,
            "sgp": self.subgroup,
        }
