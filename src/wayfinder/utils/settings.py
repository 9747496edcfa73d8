import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from wayfinder.config import (
    DEFAULT_SEARCH_LIMITS,
    DEFAULT_WALK_BUDGET,
    GITIGNORE_SEARCH_LEVELS,
    SearchLimits,
    WalkBudget,
)

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "WAYFINDER_SETTINGS"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _ensure_int_setting(
    settings: Dict[str, Any],
    key: str,
    default: int,
    *,
    minimum: int,
    maximum: int,
) -> bool:
    """Ensure an integer configuration value stays within a safe range."""
    value = settings.get(key, default)
    try:
        value = int(value)
    except (TypeError, ValueError):
        value = default

    if value < minimum:
        value = minimum
    elif value > maximum:
        value = maximum

    if settings.get(key) != value:
        settings[key] = value
        return True
    return False


def _ensure_float_setting(
    settings: Dict[str, Any],
    key: str,
    default: float,
    *,
    minimum: float,
    maximum: float,
) -> bool:
    """Ensure a float configuration value stays within a safe range."""
    value = settings.get(key, default)
    try:
        value = float(value)
    except (TypeError, ValueError):
        value = default

    if value < minimum:
        value = minimum
    elif value > maximum:
        value = maximum

    if settings.get(key) != value:
        settings[key] = value
        return True
    return False


def _ensure_bool_setting(settings: Dict[str, Any], key: str, default: bool) -> bool:
    """Ensure a boolean configuration value."""
    value = settings.get(key, default)
    if isinstance(value, bool):
        normalized = value
    elif isinstance(value, str):
        normalized = value.strip().lower() in {"1", "true", "yes", "on"}
    else:
        normalized = bool(value)

    if settings.get(key) != normalized:
        settings[key] = normalized
        return True
    return False


def _ensure_log_level_setting(settings: Dict[str, Any], key: str, default: str) -> bool:
    """Ensure a logging level name the logging module understands."""
    value = settings.get(key, default)
    normalized = str(value).strip().upper() if value is not None else default
    if normalized not in VALID_LOG_LEVELS:
        normalized = default

    if settings.get(key) != normalized:
        settings[key] = normalized
        return True
    return False


def _default_settings() -> Dict[str, Any]:
    """Return a fresh copy of default settings."""
    return {
        "list_entry_limit": DEFAULT_WALK_BUDGET.list_entry_limit,
        "tree_entry_limit": DEFAULT_WALK_BUDGET.tree_entry_limit,
        "stats_directory_limit": DEFAULT_WALK_BUDGET.stats_directory_limit,
        "max_tree_depth": DEFAULT_WALK_BUDGET.max_tree_depth,
        "find_max_depth": DEFAULT_WALK_BUDGET.find_max_depth,
        "gitignore_search_levels": GITIGNORE_SEARCH_LEVELS,
        "simple_timeout_seconds": DEFAULT_SEARCH_LIMITS.simple_timeout_seconds,
        "complex_timeout_seconds": DEFAULT_SEARCH_LIMITS.complex_timeout_seconds,
        "return_error_objects": False,
        "log_level": "WARNING",
    }


def get_settings_path() -> Path:
    """
    Determines the appropriate path for the settings file.

    ``WAYFINDER_SETTINGS`` overrides the default location.

    Returns:
        Path: The path to the settings.json file.
    """
    override = os.environ.get(SETTINGS_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".wayfinder" / "settings.json"


def load_settings() -> Dict[str, Any]:
    """
    Loads settings from the settings file.

    If the file doesn't exist or is invalid, returns default settings.
    Out-of-range numbers are clamped; the file itself is never rewritten.

    Returns:
        Dict[str, Any]: A dictionary containing the application settings.
    """
    settings_path = get_settings_path()
    if not settings_path.exists():
        logger.info("Settings file not found. Using default settings.")
        return _default_settings()

    try:
        with open(settings_path, "r", encoding="utf-8") as f:
            settings = json.load(f)
    except (json.JSONDecodeError, IOError) as exc:
        logger.error("Failed to load or parse settings file: %s. Using defaults.", exc)
        return _default_settings()

    if not isinstance(settings, dict):
        logger.error("Settings file %s does not contain an object. Using defaults.", settings_path)
        return _default_settings()

    defaults = _default_settings()
    updated = False
    updated |= _ensure_int_setting(
        settings, "list_entry_limit", defaults["list_entry_limit"], minimum=1, maximum=100_000
    )
    updated |= _ensure_int_setting(
        settings, "tree_entry_limit", defaults["tree_entry_limit"], minimum=1, maximum=100_000
    )
    updated |= _ensure_int_setting(
        settings,
        "stats_directory_limit",
        defaults["stats_directory_limit"],
        minimum=1,
        maximum=1_000_000,
    )
    updated |= _ensure_int_setting(
        settings, "max_tree_depth", defaults["max_tree_depth"], minimum=1, maximum=50
    )
    updated |= _ensure_int_setting(
        settings, "find_max_depth", defaults["find_max_depth"], minimum=1, maximum=50
    )
    updated |= _ensure_int_setting(
        settings,
        "gitignore_search_levels",
        defaults["gitignore_search_levels"],
        minimum=1,
        maximum=50,
    )
    updated |= _ensure_float_setting(
        settings,
        "simple_timeout_seconds",
        defaults["simple_timeout_seconds"],
        minimum=0.1,
        maximum=300.0,
    )
    updated |= _ensure_float_setting(
        settings,
        "complex_timeout_seconds",
        defaults["complex_timeout_seconds"],
        minimum=0.1,
        maximum=300.0,
    )
    updated |= _ensure_bool_setting(settings, "return_error_objects", defaults["return_error_objects"])
    updated |= _ensure_log_level_setting(settings, "log_level", defaults["log_level"])

    if updated:
        logger.info("Normalized settings loaded from %s", settings_path)
    return settings


def budget_from_settings(settings: Dict[str, Any]) -> WalkBudget:
    """Build a :class:`WalkBudget` from loaded settings."""
    return WalkBudget(
        list_entry_limit=settings.get("list_entry_limit", DEFAULT_WALK_BUDGET.list_entry_limit),
        tree_entry_limit=settings.get("tree_entry_limit", DEFAULT_WALK_BUDGET.tree_entry_limit),
        stats_directory_limit=settings.get(
            "stats_directory_limit", DEFAULT_WALK_BUDGET.stats_directory_limit
        ),
        max_tree_depth=settings.get("max_tree_depth", DEFAULT_WALK_BUDGET.max_tree_depth),
        find_max_depth=settings.get("find_max_depth", DEFAULT_WALK_BUDGET.find_max_depth),
    )


def limits_from_settings(settings: Dict[str, Any]) -> SearchLimits:
    """Build :class:`SearchLimits` from loaded settings; pattern ceilings stay fixed."""
    return SearchLimits(
        simple_timeout_seconds=settings.get(
            "simple_timeout_seconds", DEFAULT_SEARCH_LIMITS.simple_timeout_seconds
        ),
        complex_timeout_seconds=settings.get(
            "complex_timeout_seconds", DEFAULT_SEARCH_LIMITS.complex_timeout_seconds
        ),
    )
