"""Supabase repository - the only module that talks to the hosted backend.

Wraps a supabase `AsyncClient`. Authentication and row-level security stay
with Supabase; this layer only issues the queries the app needs and turns
backend failures into BackendError or structured results."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from supabase import AsyncClient, acreate_client

from ..errors import BackendError
from ..logging_config import get_logger
from ..settings import Settings
from ..validation import validate_vote
from ..voting.app_settings import MODULES_LIST_KEY, AppSettings, parse_modules_list
from ..voting.stats import GlobalStats, UserStats, calculate_global_stats, calculate_user_stats

logger = get_logger(__name__)

ELIGIBILITY_RPC = "check_student_eligibility"
VOTABLE_USERS_VIEW = "votable_users"
ALREADY_VOTED_ERROR = "You have already voted for this student. Votes cannot be changed."
SELF_VOTE_ERROR = "You cannot vote for yourself"
INVALID_VALUES_ERROR = "Invalid values (0-20)"

# postgrest needs a filter on bulk deletes; no prediction has the nil uuid
NIL_UUID = "00000000-0000-0000-0000-000000000000"
UNDEFINED_TABLE_CODE = "42P01"


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a write against the backend (vote, setting, deletion)"""

    success: bool
    error: str | None = None


def _friendly_insert_error(message: str) -> str:
    """Map database constraint messages to something a student can act on"""
    if "check constraint" in message:
        return INVALID_VALUES_ERROR
    if "voter_id != target_id" in message:
        return SELF_VOTE_ERROR
    if "duplicate" in message or "unique" in message:
        return ALREADY_VOTED_ERROR
    return message


def _is_missing_relation(error: Exception) -> bool:
    message = str(error)
    return (
        getattr(error, "code", None) == UNDEFINED_TABLE_CODE or "relation" in message or "does not exist" in message
    )


class SupabaseRepository:
    """Queries against the studentvote Supabase project."""

    def __init__(self, client: AsyncClient):
        self._client = client

    async def check_student_eligibility(self, matricule: str) -> dict[str, Any]:
        """Call the `check_student_eligibility` RPC.

        The RPC returns a list of rows; the first one carries `{valid, available}`.

        Args:
            matricule: Registration id to check

        Returns:
            The first row, or `{valid: False, available: False}` when none

        Raises:
            Exception: Whatever the client raises; the EligibilityGate wraps it
        """
        logger.trace(f"RPC {ELIGIBILITY_RPC} p_matricule={matricule}")  # type: ignore[attr-defined]
        response = await self._client.rpc(ELIGIBILITY_RPC, {"p_matricule": matricule}).execute()
        rows = response.data or []
        if isinstance(rows, Mapping):
            return dict(rows)
        return dict(rows[0]) if rows else {"valid": False, "available": False}

    # Settings

    async def fetch_settings(self) -> AppSettings:
        """Load the whole settings table.

        Raises:
            BackendError: If the query fails
        """
        try:
            response = await self._client.table("settings").select("key, value").execute()
        except Exception as e:
            raise BackendError(f"Failed to load settings: {e}") from e
        return AppSettings.from_rows(response.data or [])

    async def fetch_modules_list(self) -> list[str]:
        """Load the configured module names, falling back to the defaults.

        A backend failure also yields the defaults; the vote form must still render.
        """
        try:
            response = (
                await self._client.table("settings").select("value").eq("key", MODULES_LIST_KEY).limit(1).execute()
            )
        except Exception as e:
            logger.warning(f"Failed to load modules list, using defaults: {e}")
            return parse_modules_list(None)
        rows = response.data or []
        return parse_modules_list(rows[0].get("value") if rows else None)

    async def update_setting(self, key: str, value: str) -> ActionResult:
        """Overwrite one settings row and stamp `updated_at`.

        Args:
            key: Settings key (e.g. "voting_enabled", "modules_list")
            value: New string value
        """
        row = {"value": value, "updated_at": datetime.now(UTC).isoformat()}
        try:
            await self._client.table("settings").update(row).eq("key", key).execute()
        except Exception as e:
            logger.warning(f"Failed to update setting {key}: {e}")
            return ActionResult(False, str(e))
        logger.info(f"Setting {key} updated")
        return ActionResult(True)

    # Profiles

    async def fetch_all_profiles(self) -> list[dict[str, Any]]:
        """Every profile, ordered by name (admin user list).

        Raises:
            BackendError: If the query fails
        """
        try:
            response = await self._client.table("profiles").select("*").order("full_name").execute()
        except Exception as e:
            raise BackendError(f"Failed to load profiles: {e}") from e
        return list(response.data or [])

    async def fetch_votable_users(self, exclude_id: str | None = None) -> list[dict[str, Any]]:
        """Active students a voter can vote on.

        Reads the `votable_users` view. Projects without the view fall back to
        active rows of `profiles`, reshaped to the view's columns.

        Args:
            exclude_id: Profile id to leave out (usually the voter)

        Raises:
            BackendError: If neither source can be read
        """
        try:
            query = (
                self._client.table(VOTABLE_USERS_VIEW)
                .select("*, profile:profiles(*)")
                .eq("active", True)
                .order("full_name")
            )
            if exclude_id:
                query = query.neq("profile_id", exclude_id)
            response = await query.execute()
            return list(response.data or [])
        except Exception as e:
            if not _is_missing_relation(e):
                raise BackendError(f"Failed to load votable users: {e}") from e
            logger.info(f"{VOTABLE_USERS_VIEW} view unavailable, reading profiles: {e}")

        try:
            query = self._client.table("profiles").select("*").eq("active", True).order("full_name")
            if exclude_id:
                query = query.neq("id", exclude_id)
            response = await query.execute()
        except Exception as e:
            raise BackendError(f"Failed to load votable users: {e}") from e

        return [
            {
                "id": profile["id"],
                "profile_id": profile["id"],
                "full_name": profile.get("full_name"),
                "active": profile.get("active"),
                "profile": profile,
            }
            for profile in response.data or []
        ]

    # Predictions

    async def fetch_predictions_for_target(self, user_id: str) -> list[dict[str, Any]]:
        """Predictions received by one student.

        Raises:
            BackendError: If the query fails
        """
        try:
            response = await self._client.table("predictions").select("*").eq("target_id", user_id).execute()
        except Exception as e:
            raise BackendError(f"Failed to load predictions for {user_id}: {e}") from e
        return list(response.data or [])

    async def fetch_all_predictions(self) -> list[dict[str, Any]]:
        """Every prediction (admin only; RLS enforces it server-side)."""
        try:
            response = await self._client.table("predictions").select("*").execute()
        except Exception as e:
            raise BackendError(f"Failed to load predictions: {e}") from e
        return list(response.data or [])

    async def fetch_user_stats(self, user_id: str) -> UserStats:
        """Averages of the predictions one student received."""
        return calculate_user_stats(await self.fetch_predictions_for_target(user_id))

    async def fetch_global_stats(self) -> GlobalStats:
        """Admin overview built from every prediction and profile."""
        predictions = await self.fetch_all_predictions()
        profiles = await self.fetch_all_profiles()
        return calculate_global_stats(predictions, profiles)

    async def submit_prediction(
        self,
        voter_id: str,
        target_id: str,
        modules: int,
        rattrapages: int,
        votes_data: Mapping[str, str] | None = None,
    ) -> ActionResult:
        """Insert one prediction. Votes are final: a second vote for the same target is refused.

        Args:
            voter_id: Profile id of the voter
            target_id: Profile id of the student voted on
            modules: Predicted number of passed modules (0-20)
            rattrapages: Predicted number of retakes (0-20)
            votes_data: Optional {module: "validated" | "retake"} details

        Returns:
            ActionResult
        """
        if voter_id == target_id:
            return ActionResult(False, SELF_VOTE_ERROR)

        payload: dict[str, Any] = {"modules": modules, "rattrapages": rattrapages}
        if votes_data is not None:
            payload["votes_data"] = votes_data
        check = validate_vote(payload)
        if not check.valid:
            return ActionResult(False, check.error)

        try:
            existing = (
                await self._client.table("predictions")
                .select("id")
                .eq("voter_id", voter_id)
                .eq("target_id", target_id)
                .limit(1)
                .execute()
            )
            if existing.data:
                return ActionResult(False, ALREADY_VOTED_ERROR)

            row: dict[str, Any] = {
                "voter_id": voter_id,
                "target_id": target_id,
                "modules": modules,
                "rattrapages": rattrapages,
            }
            if votes_data is not None:
                row["votes_data"] = json.dumps(dict(votes_data))

            await self._client.table("predictions").insert(row).execute()
        except Exception as e:
            logger.warning(f"Prediction insert failed for voter {voter_id}: {e}")
            return ActionResult(False, _friendly_insert_error(str(e)))

        logger.info(f"Prediction recorded: {voter_id} -> {target_id}")
        return ActionResult(True)

    async def delete_prediction(self, prediction_id: str, voter_id: str) -> ActionResult:
        """Delete one prediction; only rows cast by `voter_id` match."""
        try:
            await self._client.table("predictions").delete().eq("id", prediction_id).eq("voter_id", voter_id).execute()
        except Exception as e:
            logger.warning(f"Failed to delete prediction {prediction_id}: {e}")
            return ActionResult(False, str(e))
        return ActionResult(True)

    async def reset_all_predictions(self) -> ActionResult:
        """Delete every prediction (admin)."""
        try:
            await self._client.table("predictions").delete().neq("id", NIL_UUID).execute()
        except Exception as e:
            logger.warning(f"Failed to reset predictions: {e}")
            return ActionResult(False, str(e))
        logger.warning("All predictions deleted")
        return ActionResult(True)


async def create_repository(settings: Settings) -> SupabaseRepository:
    """Build a repository from settings.

    Raises:
        BackendError: If credentials are missing or the client cannot be created
    """
    if not settings.has_supabase_credentials:
        raise BackendError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")
    try:
        client = await acreate_client(settings.supabase_url, settings.supabase_anon_key)
    except Exception as e:
        raise BackendError(f"Could not create Supabase client: {e}") from e
    return SupabaseRepository(client)
