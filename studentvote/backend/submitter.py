"""Vote submission guarded against double submits."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from ..submission_lock import SubmissionLock
from .repository import ActionResult, SupabaseRepository

logger = logging.getLogger(__name__)


class VoteSubmitter:
    """Owns the submit-prediction action and its lock.

    A second `submit` while one is outstanding raises
    SubmissionInProgressError; the vote form should ignore it rather than
    show an error.
    """

    def __init__(self, repository: SupabaseRepository):
        self.repository = repository
        self.lock = SubmissionLock("submit_prediction")

    async def submit(
        self,
        voter_id: str,
        target_id: str,
        modules: int,
        rattrapages: int,
        votes_data: Mapping[str, str] | None = None,
    ) -> ActionResult:
        return await self.lock.run(
            lambda: self.repository.submit_prediction(voter_id, target_id, modules, rattrapages, votes_data)
        )
