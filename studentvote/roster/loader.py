"""Roster loader - reads the static student dataset.

The dataset is a JSON array of objects shaped like:
    {"nom": "MOUTTALI BILAL", "matricule": "X1", "gp": "1", "sgp": "A"}

Only `nom` and `matricule` are required. The loaded roster is a tuple so it
can be shared between matchers without copying."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..errors import RosterError, RosterFormatError
from .models import RosterEntry

logger = logging.getLogger(__name__)


def roster_from_records(records: Iterable[dict[str, Any]]) -> tuple[RosterEntry, ...]:
    """Build a roster from already-parsed records.

    Args:
        records: Iterable of `{nom, matricule, gp, sgp}` dicts

    Returns:
        Tuple of RosterEntry in dataset order

    Raises:
        RosterFormatError: If a record is not an object or lacks a required field
    """
    entries: list[RosterEntry] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise RosterFormatError(f"Roster record {index} is not an object")
        try:
            entries.append(RosterEntry.from_record(record))
        except KeyError as e:
            raise RosterFormatError(f"Roster record {index} is missing required field {e.args[0]!r}") from e
    return tuple(entries)


def load_roster(path: str | Path) -> tuple[RosterEntry, ...]:
    """Load the roster JSON file.

    Args:
        path: Path to the JSON dataset

    Returns:
        Tuple of RosterEntry

    Raises:
        RosterError: If the file cannot be read or is not a JSON array
        RosterFormatError: If a record is malformed
    """
    roster_path = Path(path)
    try:
        with open(roster_path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise RosterError(f"Roster file not found: {roster_path}") from e
    except json.JSONDecodeError as e:
        raise RosterError(f"Roster file {roster_path} is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise RosterError(f"Roster file {roster_path} must contain a JSON array")

    roster = roster_from_records(data)
    logger.info(f"Loaded {len(roster)} roster entries from {roster_path}")
    return roster
