"""Gitignore-aware path matching built on pathspec.

An :class:`IgnoreRuleSet` combines the fixed default exclusions with the
``.gitignore`` files found at and above an operation root. Rule sets are built
per call and never cached between calls.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from pathspec import GitIgnoreSpec

from wayfinder.config import ALWAYS_IGNORED_NAMES, GITIGNORE_FILENAME, GITIGNORE_SEARCH_LEVELS

LOGGER = logging.getLogger(__name__)

DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = tuple(
    variant
    for name in sorted(ALWAYS_IGNORED_NAMES)
    for variant in (name, f"{name}/", f"{name}/**")
)


def _compile_rules(lines: Sequence[str]) -> GitIgnoreSpec:
    """Compile gitignore lines, dropping any line pathspec refuses to parse."""
    try:
        return GitIgnoreSpec.from_lines(lines)
    except Exception as exc:  # noqa: BLE001
        LOGGER.debug("Malformed ignore content, compiling line by line: %s", exc)

    accepted: list[str] = []
    for line in lines:
        try:
            GitIgnoreSpec.from_lines([line])
        except Exception as exc:  # noqa: BLE001
            LOGGER.debug("Dropping malformed ignore rule %r: %s", line, exc)
            continue
        accepted.append(line)
    return GitIgnoreSpec.from_lines(accepted)


DEFAULT_RULES: GitIgnoreSpec = _compile_rules(DEFAULT_IGNORE_PATTERNS)


def _normalize(path: str, from_root: str | os.PathLike[str] | None) -> str:
    """Return ``path`` as a POSIX path relative to ``from_root`` without a leading ``./``."""
    candidate = os.fspath(path)
    if from_root is not None:
        root = os.fspath(from_root)
        candidate = os.path.relpath(os.path.join(root, candidate), root)
    candidate = candidate.replace("\\", "/")
    while candidate.startswith("./"):
        candidate = candidate[2:]
    return candidate


def _is_gitignore_file(normalized: str) -> bool:
    return normalized == GITIGNORE_FILENAME or normalized.endswith(f"/{GITIGNORE_FILENAME}")


@dataclass(frozen=True)
class IgnoreRuleSet:
    """Default exclusions plus the combined custom ``.gitignore`` rules for one call."""

    custom_rules: GitIgnoreSpec
    sources: tuple[Path, ...] = ()
    default_rules: GitIgnoreSpec = field(default_factory=lambda: DEFAULT_RULES)

    def is_ignored(
        self,
        path: str | os.PathLike[str],
        from_root: str | os.PathLike[str] | None = None,
        is_directory: bool = False,
    ) -> bool:
        """Return True when ``path`` is excluded by the default or custom rules.

        Directories are matched with a trailing slash so directory-only rules
        such as ``build/`` apply to them and not to files of the same name.
        """
        normalized = _normalize(os.fspath(path), from_root)
        if not normalized or normalized == "." or normalized.startswith("../"):
            return False
        if _is_gitignore_file(normalized):
            return False
        if self.default_rules.match_file(normalized):
            return True
        candidate = f"{normalized.rstrip('/')}/" if is_directory else normalized
        return self.custom_rules.match_file(candidate)

    def is_default_ignored(self, path: str | os.PathLike[str]) -> bool:
        """Return True when only the fixed default exclusions match ``path``."""
        normalized = _normalize(os.fspath(path), None)
        if not normalized or normalized == ".":
            return False
        return self.default_rules.match_file(normalized)


def collect_gitignore_texts(root: Path, max_levels: int = GITIGNORE_SEARCH_LEVELS) -> list[tuple[Path, str]]:
    """Read ``.gitignore`` files from ``root`` upward, at most ``max_levels`` directories.

    Returns ``(path, text)`` pairs ordered from the outermost ancestor to
    ``root`` itself, so rules closer to the root are evaluated last.
    """
    collected: list[tuple[Path, str]] = []
    current = root.resolve()
    for _level in range(max_levels):
        gitignore_path = current / GITIGNORE_FILENAME
        try:
            if gitignore_path.is_file():
                collected.append(
                    (gitignore_path, gitignore_path.read_text(encoding="utf-8", errors="replace"))
                )
        except OSError as exc:
            LOGGER.debug("Unable to read %s: %s", gitignore_path, exc)
        parent = current.parent
        if parent == current:
            break
        current = parent
    collected.reverse()
    return collected


def build_ignore_rule_set(
    root: str | os.PathLike[str],
    max_levels: int = GITIGNORE_SEARCH_LEVELS,
) -> IgnoreRuleSet:
    """Build the rule set for an operation rooted at ``root``."""
    root_path = Path(root)
    discovered = collect_gitignore_texts(root_path, max_levels=max_levels)
    lines: list[str] = []
    for _path, text in discovered:
        lines.extend(text.splitlines())
    LOGGER.debug(
        "Compiled %d ignore lines from %d .gitignore file(s) for %s",
        len(lines),
        len(discovered),
        root_path,
    )
    return IgnoreRuleSet(
        custom_rules=_compile_rules(lines),
        sources=tuple(path for path, _text in discovered),
    )


def rule_set_from_lines(lines: Iterable[str]) -> IgnoreRuleSet:
    """Build a rule set from in-memory gitignore lines."""
    return IgnoreRuleSet(custom_rules=_compile_rules(list(lines)))


__all__ = [
    "DEFAULT_IGNORE_PATTERNS",
    "DEFAULT_RULES",
    "IgnoreRuleSet",
    "build_ignore_rule_set",
    "collect_gitignore_texts",
    "rule_set_from_lines",
]
