"""Eligibility gate - asks the backend whether a registration id may sign up.

The backend lookup (allow-list membership + existing account) is the source of
truth. It is injected as an async callable so tests and the CLI can swap the
Supabase RPC for a fake."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from ..errors import EligibilityCheckError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0

EligibilityLookup = Callable[[str], Awaitable[Mapping[str, Any]]]


@dataclass(frozen=True)
class EligibilityResult:
    """Backend verdict for one registration id.

    `available` implies `valid`: an unauthorized id is never available.
    """

    valid: bool
    available: bool

    def __post_init__(self) -> None:
        if self.available and not self.valid:
            object.__setattr__(self, "available", False)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> EligibilityResult:
        """Build from the RPC row; a missing row means neither valid nor available"""
        if not payload:
            return cls(valid=False, available=False)
        return cls(valid=bool(payload.get("valid")), available=bool(payload.get("available")))


class EligibilityGate:
    """Wraps the remote eligibility lookup with a timeout."""

    def __init__(self, lookup: EligibilityLookup, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        """Initialize the gate.

        Args:
            lookup: Async callable taking a registration id and returning the
                `{valid, available}` mapping
            timeout: Seconds before the lookup counts as failed
        """
        self._lookup = lookup
        self.timeout = timeout

    async def check_eligibility(self, registration_id: str) -> EligibilityResult:
        """Query the backend for one registration id.

        Raises:
            EligibilityCheckError: On timeout or any lookup failure
        """
        try:
            payload = await asyncio.wait_for(self._lookup(registration_id), timeout=self.timeout)
            result = EligibilityResult.from_payload(payload)
        except TimeoutError as e:
            raise EligibilityCheckError(f"Eligibility lookup timed out after {self.timeout}s") from e
        except Exception as e:
            raise EligibilityCheckError(f"Eligibility lookup failed: {e}") from e

        logger.debug(f"Eligibility for {registration_id}: valid={result.valid} available={result.available}")
        return result


async def is_matricule_already_used(gate: EligibilityGate, matricule: str) -> bool:
    """Whether a registration id is already claimed (or cannot be checked).

    Lookup failures count as "used" so signup stays blocked.
    """
    try:
        result = await gate.check_eligibility(matricule)
    except EligibilityCheckError as e:
        logger.warning(f"Treating {matricule} as used: {e}")
        return True
    return not result.available
