"""
Application settings using pydantic-settings for type-safe configuration.

Environment variables (or a .env file) configure the Supabase connection,
the roster location and the eligibility lookup timeout. Settings are loaded
once and cached.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Defaults are suitable for local development; the Supabase URL and anon key
    must be provided for any command that talks to the backend.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # === Supabase ===
    supabase_url: str = Field(
        default="",
        description="Supabase project URL",
    )
    supabase_anon_key: str = Field(
        default="",
        description="Supabase anon (public) API key",
    )

    # === Roster ===
    roster_path: Path = Field(
        default=Path("etudiant.json"),
        description="JSON file holding the student roster ({nom, matricule, gp, sgp} records)",
    )

    # === Eligibility ===
    eligibility_timeout_seconds: float = Field(
        default=5.0,
        description="Seconds to wait for the eligibility RPC before failing closed",
    )

    # === Logging ===
    log_level: str = Field(
        default="INFO",
        description="TRACE, DEBUG, INFO, WARNING or ERROR",
    )

    @field_validator("eligibility_timeout_seconds", mode="after")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Reject non-positive timeouts."""
        if v <= 0:
            raise ValueError(f"Invalid ELIGIBILITY_TIMEOUT_SECONDS: {v}. Must be > 0")
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the level name."""
        return v.upper()

    @property
    def has_supabase_credentials(self) -> bool:
        """Whether both the URL and the anon key are set."""
        return bool(self.supabase_url and self.supabase_anon_key)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for the lifetime of the process.
    """
    return Settings()
