"""Configuration defaults for Wayfinder's exploration and search tools."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WalkBudget:
    """Numeric ceilings bounding directory traversal cost."""

    list_entry_limit: int = 2000
    tree_entry_limit: int = 1000
    stats_directory_limit: int = 5000
    max_tree_depth: int = 10
    find_max_depth: int = 8


@dataclass(frozen=True)
class SearchLimits:
    """Ceilings applied to find patterns before and during glob expansion."""

    max_alternatives: int = 50
    max_pattern_length: int = 300
    max_complexity_score: int = 25
    max_wildcard_segments: int = 6
    max_total_patterns: int = 100
    simple_timeout_seconds: float = 5.0
    complex_timeout_seconds: float = 10.0
    simple_pattern_wildcards: int = 2


DEFAULT_WALK_BUDGET = WalkBudget()
DEFAULT_SEARCH_LIMITS = SearchLimits()

# Entries excluded from every result, independent of .gitignore handling.
ALWAYS_IGNORED_NAMES: frozenset[str] = frozenset({".chara", "node_modules", ".git"})

# Dotfiles surfaced even when hidden entries are excluded.
IMPORTANT_HIDDEN_FILES: tuple[str, ...] = (".gitignore", ".chara.json")

GITIGNORE_FILENAME: str = ".gitignore"
GITIGNORE_SEARCH_LEVELS: int = 5

# Build output and cache directories skipped by find in addition to the always-ignored names.
FIND_DEFAULT_EXCLUDED_DIRS: tuple[str, ...] = (
    ".chara",
    ".git",
    "node_modules",
    ".svelte-kit",
    "build",
    "dist",
    ".next",
    "coverage",
)

HIDDEN_CATCH_ALL_EXCLUSION: str = "!**/.*"
DEFAULT_FIND_PATTERN: str = "**/*"

EMPTY_DIRECTORY_TEXT: str = "Directory is empty"
NO_MATCHES_TEXT: str = "No matches found"

SIMILARITY_INPUT_LIMIT: int = 100

PROJECT_CONFIG_FILENAME: str = ".chara.json"

# Project marker files reported by the env action, keyed by result field.
PROJECT_MARKER_FILES: dict[str, tuple[str, ...]] = {
    "packageJson": ("package.json",),
    "pyproject": ("pyproject.toml",),
    "requirements": ("requirements.txt",),
    "readme": ("README.md", "readme.md"),
    "gitignore": (".gitignore",),
    "tsconfig": ("tsconfig.json",),
    "eslintrc": (".eslintrc.js", ".eslintrc.json"),
    "prettierrc": (".prettierrc", "prettier.config.js"),
    "dockerfile": ("Dockerfile",),
    "dockerCompose": ("docker-compose.yml", "docker-compose.yaml"),
}

# Environment variables safe to echo back to a caller.
SAFE_ENVIRONMENT_VARIABLES: tuple[str, ...] = (
    "PATH",
    "HOME",
    "USER",
    "SHELL",
    "TERM",
    "PWD",
    "LANG",
    "LC_ALL",
    "TZ",
    "VIRTUAL_ENV",
    "CI",
    "GITHUB_ACTIONS",
    "VERCEL",
    "NETLIFY",
)

__all__ = [
    "WalkBudget",
    "SearchLimits",
    "DEFAULT_WALK_BUDGET",
    "DEFAULT_SEARCH_LIMITS",
    "ALWAYS_IGNORED_NAMES",
    "IMPORTANT_HIDDEN_FILES",
    "GITIGNORE_FILENAME",
    "GITIGNORE_SEARCH_LEVELS",
    "FIND_DEFAULT_EXCLUDED_DIRS",
    "HIDDEN_CATCH_ALL_EXCLUSION",
    "DEFAULT_FIND_PATTERN",
    "EMPTY_DIRECTORY_TEXT",
    "NO_MATCHES_TEXT",
    "SIMILARITY_INPUT_LIMIT",
    "PROJECT_CONFIG_FILENAME",
    "PROJECT_MARKER_FILES",
    "SAFE_ENVIRONMENT_VARIABLES",
]
