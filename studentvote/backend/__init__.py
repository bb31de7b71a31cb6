"""Supabase access layer."""

from .admin import AdminPanel
from .repository import ActionResult, SupabaseRepository, create_repository
from .submitter import VoteSubmitter

__all__ = [
    "ActionResult",
    "AdminPanel",
    "SupabaseRepository",
    "VoteSubmitter",
    "create_repository",
]
