"""Error classes for studentvote.

Local matching outcomes (empty, ambiguous, not found) are returned as values.
These exceptions cover the failures that can cross a module boundary.
"""

from __future__ import annotations


class StudentVoteError(Exception):
    """Base exception for studentvote errors."""

    pass


class RosterError(StudentVoteError):
    """Raised when the roster dataset cannot be read."""

    pass


class RosterFormatError(RosterError):
    """Raised when a roster record is missing a required field."""

    pass


class EligibilityCheckError(StudentVoteError):
    """Raised when the remote eligibility lookup fails or times out."""

    pass


class SubmissionInProgressError(StudentVoteError):
    """Raised when a guarded action is started while a previous run is outstanding."""

    def __init__(self, message: str = "submission already in progress") -> None:
        super().__init__(message)


class BackendError(StudentVoteError):
    """Raised when a Supabase call fails in the repository layer."""

    pass
