"""
studentvote - signup name resolution and vote tooling for the module-prediction app.

This package contains:
- roster: the reference student dataset
- resolution: name tokenizer and two-pass matcher
- eligibility: backend allow-list gate and signup validation
- submission_lock: double-submit guard for async actions
- voting: vote statistics and admin settings
- backend: Supabase repository
"""

from studentvote.eligibility import (
    EligibilityGate,
    EligibilityResult,
    SignupCheck,
    SignupValidator,
    is_matricule_already_used,
)
from studentvote.errors import SubmissionInProgressError
from studentvote.resolution import MatchResult, MatchStatus, NameMatcher, resolve, tokenize_name
from studentvote.roster import RosterEntry, load_roster, roster_from_records
from studentvote.submission_lock import SubmissionLock

__all__ = [
    "EligibilityGate",
    "EligibilityResult",
    "MatchResult",
    "MatchStatus",
    "NameMatcher",
    "RosterEntry",
    "SignupCheck",
    "SignupValidator",
    "SubmissionInProgressError",
    "SubmissionLock",
    "is_matricule_already_used",
    "load_roster",
    "resolve",
    "roster_from_records",
    "tokenize_name",
]
