"""Input validation and sanitization for form fields.

These checks run before user input reaches the matcher or the backend; they
bound lengths and strip markup rather than guarantee safety on their own."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

MAX_INPUT_LENGTH = 500
MAX_EMAIL_LENGTH = 254  # RFC 5321
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 128
MAX_MODULE_NAME_LENGTH = 100
MIN_STUDENT_NAME_LENGTH = 2
MAX_STUDENT_NAME_LENGTH = 150
MAX_VOTE_COUNT = 20

VOTE_CHOICES = frozenset({"validated", "retake"})

_ANGLE_BRACKETS = re.compile(r"[<>]")
_JS_PROTOCOL = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on\w+=", re.IGNORECASE)
_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_MODULE_NAME = re.compile(r"^[a-zA-Z0-9\s\-'éèêëàâäôöùûüçÉÈÊËÀÂÄÔÖÙÛÜÇ]+$")


@dataclass(frozen=True)
class VoteValidation:
    """Result of validating a vote payload"""

    valid: bool
    error: str | None = None


def sanitize_string(value: Any) -> str:
    """Strip markup fragments from free text.

    Non-strings become "". Removes < and >, "javascript:" and inline event
    handlers such as "onclick=", then truncates to 500 characters.

    Examples:
        "  <b>Sara</b> " -> "bSara/b"
        "onload=alert(1)" -> "alert(1)"
    """
    if not isinstance(value, str):
        return ""
    text = value.strip()
    text = _ANGLE_BRACKETS.sub("", text)
    text = _JS_PROTOCOL.sub("", text)
    text = _EVENT_HANDLER.sub("", text)
    return text[:MAX_INPUT_LENGTH]


def is_valid_email(email: Any) -> bool:
    if not email or not isinstance(email, str):
        return False
    candidate = email.strip()
    return bool(_EMAIL.match(candidate)) and len(candidate) <= MAX_EMAIL_LENGTH


def is_valid_password(password: Any) -> bool:
    if not password or not isinstance(password, str):
        return False
    return MIN_PASSWORD_LENGTH <= len(password) <= MAX_PASSWORD_LENGTH


def is_valid_module_name(name: Any) -> bool:
    """Letters (French accents included), digits, spaces, hyphens and apostrophes; 1-100 chars."""
    if not name or not isinstance(name, str):
        return False
    sanitized = sanitize_string(name)
    if not 1 <= len(sanitized) <= MAX_MODULE_NAME_LENGTH:
        return False
    return bool(_MODULE_NAME.match(sanitized))


def is_valid_student_name(name: Any) -> bool:
    if not name or not isinstance(name, str):
        return False
    return MIN_STUDENT_NAME_LENGTH <= len(sanitize_string(name)) <= MAX_STUDENT_NAME_LENGTH


def _is_vote_count(value: Any) -> bool:
    # bool is an int subclass; True must not pass as 1
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= MAX_VOTE_COUNT


def validate_vote(data: Any) -> VoteValidation:
    """Validate a prediction payload before submission.

    Args:
        data: Mapping with `modules`, `rattrapages` and optional `votes_data`
            ({module name: "validated" | "retake"})

    Returns:
        VoteValidation with the first problem found
    """
    if not isinstance(data, Mapping):
        return VoteValidation(False, "Invalid vote data")

    if not _is_vote_count(data.get("modules")):
        return VoteValidation(False, f"Invalid number of modules (0-{MAX_VOTE_COUNT})")

    if not _is_vote_count(data.get("rattrapages")):
        return VoteValidation(False, f"Invalid number of retakes (0-{MAX_VOTE_COUNT})")

    votes_data = data.get("votes_data")
    if votes_data is not None:
        if not isinstance(votes_data, Mapping):
            return VoteValidation(False, "Invalid per-module vote details")
        bad = [module for module, choice in votes_data.items() if choice not in VOTE_CHOICES]
        if bad:
            return VoteValidation(False, f"Invalid vote for module {bad[0]!r}")

    return VoteValidation(True)
