"""Student roster: the reference dataset signup names resolve against."""

from .loader import load_roster, roster_from_records
from .models import RosterEntry

__all__ = [
    "RosterEntry",
    "load_roster",
    "roster_from_records",
]
