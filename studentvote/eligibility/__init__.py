"""Eligibility checks against the backend allow-list."""

from .gate import EligibilityGate, EligibilityResult, is_matricule_already_used
from .signup import SignupCheck, SignupValidator

__all__ = [
    "EligibilityGate",
    "EligibilityResult",
    "SignupCheck",
    "SignupValidator",
    "is_matricule_already_used",
]
