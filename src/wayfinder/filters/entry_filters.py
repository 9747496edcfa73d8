"""Name-based admission rules applied before any gitignore evaluation."""

from __future__ import annotations

from wayfinder.config import ALWAYS_IGNORED_NAMES, IMPORTANT_HIDDEN_FILES
from wayfinder.filters.ignore_rules import IgnoreRuleSet


def is_always_ignored(name: str) -> bool:
    """Return True for names excluded from every result."""
    return name in ALWAYS_IGNORED_NAMES


def is_hidden(name: str) -> bool:
    """Return True for dotfiles and dot-directories."""
    return name.startswith(".")


def is_important_hidden_file(name: str) -> bool:
    """Return True for dotfiles that are surfaced even when hidden entries are excluded."""
    return name in IMPORTANT_HIDDEN_FILES


def passes_hidden_policy(name: str, include_hidden: bool) -> bool:
    """Apply the hidden-file policy to a bare entry name."""
    if include_hidden or not is_hidden(name):
        return True
    return is_important_hidden_file(name)


def admit_entry(
    name: str,
    relative_path: str,
    *,
    is_directory: bool,
    include_hidden: bool,
    rules: IgnoreRuleSet | None,
    root: str | None = None,
) -> bool:
    """Run the shared admission chain for one directory entry.

    Order is always-ignored names, then the hidden-file policy, then the
    gitignore rules when ``rules`` is provided.
    """
    if is_always_ignored(name):
        return False
    if not passes_hidden_policy(name, include_hidden):
        return False
    if rules is not None and rules.is_ignored(relative_path, root, is_directory):
        return False
    return True


__all__ = [
    "is_always_ignored",
    "is_hidden",
    "is_important_hidden_file",
    "passes_hidden_policy",
    "admit_entry",
]
