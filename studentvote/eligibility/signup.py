"""Signup validation: roster match first, backend verdict second.

`validate_and_resolve` never raises. Every outcome comes back as a
SignupCheck the signup form can display directly."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..errors import EligibilityCheckError
from ..resolution.matcher import NameMatcher
from ..roster.models import RosterEntry
from .gate import EligibilityGate

logger = logging.getLogger(__name__)

NAME_REQUIRED_ERROR = "Name is required"
STUDENT_NOT_FOUND_ERROR = "Student not found in the roster."
CONNECTION_ERROR = "Could not reach the verification server. Please retry."
NOT_AUTHORIZED_ERROR = "This student is not authorized by the allow-list."


@dataclass(frozen=True)
class SignupCheck:
    """Outcome of validating a signup name"""

    valid: bool
    available: bool
    error: str | None = None
    student_info: RosterEntry | None = None

    @property
    def can_sign_up(self) -> bool:
        return self.valid and self.available and self.error is None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the field names the signup form expects"""
        return {
            "valid": self.valid,
            "available": self.available,
            "error": self.error,
            "studentInfo": self.student_info.to_record() if self.student_info else None,
        }


class SignupValidator:
    """Combines the local NameMatcher with the backend EligibilityGate."""

    def __init__(self, matcher: NameMatcher, gate: EligibilityGate):
        self.matcher = matcher
        self.gate = gate

    async def validate_and_resolve(self, name: str | None) -> SignupCheck:
        """Resolve a signup name and check it against the backend.

        Local failures (blank, not found, ambiguous) short-circuit before any
        remote call. A failed remote call blocks signup but keeps the local
        match so the form can still show who was recognized.

        Args:
            name: Name typed on the signup form

        Returns:
            SignupCheck
        """
        if not name or not name.strip():
            return SignupCheck(valid=False, available=False, error=NAME_REQUIRED_ERROR)

        match = self.matcher.resolve(name)
        if not match.is_resolved or match.entry is None:
            return SignupCheck(valid=False, available=False, error=match.reason or STUDENT_NOT_FOUND_ERROR)

        entry = match.entry
        try:
            eligibility = await self.gate.check_eligibility(entry.registration_id)
        except EligibilityCheckError as e:
            logger.warning(f"Blocking signup for {entry.registration_id}: {e}")
            return SignupCheck(valid=True, available=False, error=CONNECTION_ERROR, student_info=entry)

        if not eligibility.valid:
            logger.info(f"{entry.registration_id} matched locally but is not on the allow-list")
            return SignupCheck(valid=False, available=False, error=NOT_AUTHORIZED_ERROR)

        if not eligibility.available:
            return SignupCheck(
                valid=True,
                available=False,
                error=f"An account already exists for {entry.full_name}",
                student_info=entry,
            )

        return SignupCheck(valid=True, available=True, student_info=entry)
