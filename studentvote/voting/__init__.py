"""Vote statistics and admin settings."""

from .app_settings import DEFAULT_MODULES, AppSettings, parse_modules_list
from .stats import (
    GlobalStats,
    ModuleTally,
    UserStats,
    calculate_global_stats,
    calculate_user_stats,
    summarize_module_votes,
)

__all__ = [
    "DEFAULT_MODULES",
    "AppSettings",
    "GlobalStats",
    "ModuleTally",
    "UserStats",
    "calculate_global_stats",
    "calculate_user_stats",
    "parse_modules_list",
    "summarize_module_votes",
]
