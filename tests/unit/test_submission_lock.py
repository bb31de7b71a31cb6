"""Tests for SubmissionLock."""

from __future__ import annotations

import asyncio

import pytest

from studentvote.errors import StudentVoteError, SubmissionInProgressError
from studentvote.submission_lock import SubmissionLock


class TestSubmissionLock:
    def test_unlocked_at_rest(self):
        assert SubmissionLock().is_locked() is False

    @pytest.mark.asyncio
    async def test_returns_action_result_and_releases(self):
        lock = SubmissionLock("add_module")

        async def action() -> str:
            assert lock.is_locked()
            return "done"

        assert await lock.run(action) == "done"
        assert lock.is_locked() is False

    @pytest.mark.asyncio
    async def test_concurrent_run_rejected_immediately(self):
        lock = SubmissionLock("submit_prediction")
        release = asyncio.Event()
        calls = 0

        async def action() -> int:
            nonlocal calls
            calls += 1
            await release.wait()
            return calls

        first = asyncio.create_task(lock.run(action))
        await asyncio.sleep(0)
        assert lock.is_locked()

        with pytest.raises(SubmissionInProgressError):
            await lock.run(action)

        release.set()
        assert await first == 1
        assert calls == 1
        assert lock.is_locked() is False

    @pytest.mark.asyncio
    async def test_gathered_runs_only_one_proceeds(self):
        lock = SubmissionLock()
        invoked = []

        async def action() -> str:
            invoked.append(1)
            await asyncio.sleep(0.01)
            return "ok"

        results = await asyncio.gather(lock.run(action), lock.run(action), return_exceptions=True)

        assert len(invoked) == 1
        assert sorted(type(r).__name__ for r in results) == ["SubmissionInProgressError", "str"]

    @pytest.mark.asyncio
    async def test_failure_releases_and_reraises(self):
        lock = SubmissionLock()

        async def failing() -> None:
            raise ValueError("insert failed")

        with pytest.raises(ValueError, match="insert failed"):
            await lock.run(failing)

        assert lock.is_locked() is False

        async def succeeding() -> str:
            return "retry ok"

        assert await lock.run(succeeding) == "retry ok"

    @pytest.mark.asyncio
    async def test_independent_instances(self):
        add_lock = SubmissionLock("add_module")
        delete_lock = SubmissionLock("delete_module")
        release = asyncio.Event()

        async def slow() -> str:
            await release.wait()
            return "added"

        async def fast() -> str:
            return "deleted"

        pending = asyncio.create_task(add_lock.run(slow))
        await asyncio.sleep(0)

        assert await delete_lock.run(fast) == "deleted"

        release.set()
        assert await pending == "added"

    def test_in_progress_error_is_distinct(self):
        error = SubmissionInProgressError()

        assert isinstance(error, StudentVoteError)
        assert str(error) == "submission already in progress"
