"""Submission lock - at most one in-flight run per guarded action.

A second `run` while the first is outstanding fails immediately with
SubmissionInProgressError instead of queuing. Create one lock per logical
action (e.g. one for "add module", another for "delete module").

Usage:
    submit_lock = SubmissionLock("submit_prediction")
    result = await submit_lock.run(lambda: repository.submit_prediction(...))
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from .errors import SubmissionInProgressError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SubmissionLock:
    """Non-queuing guard around one asynchronous action."""

    def __init__(self, name: str = "submission"):
        self.name = name
        self._locked = False

    def is_locked(self) -> bool:
        """True exactly while a guarded action is outstanding"""
        return self._locked

    async def run(self, action: Callable[[], Awaitable[T]]) -> T:
        """Run `action` unless a previous run is still outstanding.

        The check and the flag update happen before the first await, so two
        runs scheduled on the same event loop cannot both proceed.

        Args:
            action: Zero-argument callable returning an awaitable

        Returns:
            Whatever the action returns

        Raises:
            SubmissionInProgressError: If the lock is already held
        """
        if self._locked:
            logger.debug(f"Rejected re-entrant run of {self.name}")
            raise SubmissionInProgressError(f"{self.name}: submission already in progress")

        self._locked = True
        try:
            return await action()
        finally:
            self._locked = False

    def __repr__(self) -> str:
        return f"SubmissionLock(name={self.name!r}, locked={self._locked})"
