"""Utility modules for Wayfinder."""

from .formatting import format_bytes, format_listing, format_matches, format_tree
from .paths import resolve_directory
from .settings import budget_from_settings, limits_from_settings, load_settings
from .suggestions import suggest_action

__all__ = [
    "budget_from_settings",
    "format_bytes",
    "format_listing",
    "format_matches",
    "format_tree",
    "limits_from_settings",
    "load_settings",
    "resolve_directory",
    "suggest_action",
]
