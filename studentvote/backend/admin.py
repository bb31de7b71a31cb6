"""Admin panel actions: settings toggles, module list edits and vote resets.

Every mutation runs under its own SubmissionLock, so a double click on
"add module" cannot write the list twice. The module edits share one lock
because they read-modify-write the same `modules_list` row."""

from __future__ import annotations

import json
import logging

from ..submission_lock import SubmissionLock
from ..validation import is_valid_module_name, sanitize_string
from ..voting.app_settings import ANONYMOUS_VOTES_KEY, MODULES_LIST_KEY, SHOW_RESULTS_KEY, VOTING_ENABLED_KEY
from .repository import ActionResult, SupabaseRepository

logger = logging.getLogger(__name__)

FLAG_KEYS = frozenset({VOTING_ENABLED_KEY, ANONYMOUS_VOTES_KEY, SHOW_RESULTS_KEY})
MAX_MODULES = 50

MODULE_NAME_REQUIRED_ERROR = "Module name is required"
INVALID_MODULE_NAME_ERROR = "Module name contains invalid characters"
DUPLICATE_MODULE_ERROR = "This module already exists"
MAX_MODULES_ERROR = f"Maximum number of modules reached ({MAX_MODULES})"
UNKNOWN_MODULE_ERROR = "Unknown module"


def _clean_module_name(raw: str) -> tuple[str | None, str | None]:
    """Returns (name, error); exactly one of them is set"""
    name = sanitize_string(raw).strip()
    if not name:
        return None, MODULE_NAME_REQUIRED_ERROR
    if not is_valid_module_name(name):
        return None, INVALID_MODULE_NAME_ERROR
    return name, None


class AdminPanel:
    """Admin mutations over a SupabaseRepository.

    Each public coroutine raises SubmissionInProgressError when the same kind
    of action is already running; validation failures come back as an
    unsuccessful ActionResult without touching the backend.
    """

    def __init__(self, repository: SupabaseRepository):
        self.repository = repository
        self.settings_lock = SubmissionLock("update_setting")
        self.modules_lock = SubmissionLock("edit_modules")
        self.reset_lock = SubmissionLock("reset_predictions")
        self.delete_lock = SubmissionLock("delete_prediction")

    async def set_flag(self, key: str, enabled: bool) -> ActionResult:
        """Turn voting_enabled, anonymous_votes or show_results on or off."""
        if key not in FLAG_KEYS:
            raise ValueError(f"Not a boolean setting: {key}")
        value = "true" if enabled else "false"
        return await self.settings_lock.run(lambda: self.repository.update_setting(key, value))

    async def add_module(self, raw_name: str) -> ActionResult:
        name, error = _clean_module_name(raw_name)
        if error:
            return ActionResult(False, error)

        async def add() -> ActionResult:
            modules = await self.repository.fetch_modules_list()
            if name in modules:
                return ActionResult(False, DUPLICATE_MODULE_ERROR)
            if len(modules) >= MAX_MODULES:
                return ActionResult(False, MAX_MODULES_ERROR)
            return await self._write_modules([*modules, name])

        return await self.modules_lock.run(add)

    async def rename_module(self, old_name: str, raw_name: str) -> ActionResult:
        name, error = _clean_module_name(raw_name)
        if error:
            return ActionResult(False, error)
        if name == old_name:
            return ActionResult(True)

        async def rename() -> ActionResult:
            modules = await self.repository.fetch_modules_list()
            if old_name not in modules:
                return ActionResult(False, UNKNOWN_MODULE_ERROR)
            if name in modules:
                return ActionResult(False, DUPLICATE_MODULE_ERROR)
            return await self._write_modules([name if m == old_name else m for m in modules])

        return await self.modules_lock.run(rename)

    async def remove_module(self, name: str) -> ActionResult:
        async def remove() -> ActionResult:
            modules = await self.repository.fetch_modules_list()
            if name not in modules:
                return ActionResult(False, UNKNOWN_MODULE_ERROR)
            return await self._write_modules([m for m in modules if m != name])

        return await self.modules_lock.run(remove)

    async def reset_votes(self) -> ActionResult:
        """Delete every prediction."""
        return await self.reset_lock.run(self.repository.reset_all_predictions)

    async def delete_prediction(self, prediction_id: str, voter_id: str) -> ActionResult:
        return await self.delete_lock.run(lambda: self.repository.delete_prediction(prediction_id, voter_id))

    async def _write_modules(self, modules: list[str]) -> ActionResult:
        result = await self.repository.update_setting(MODULES_LIST_KEY, json.dumps(modules, ensure_ascii=False))
        if result.success:
            logger.info(f"Modules list now has {len(modules)} entries")
        return result
