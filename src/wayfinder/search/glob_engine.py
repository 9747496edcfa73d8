"""Bounded glob expansion against the filesystem.

Patterns are matched segment by segment with :func:`fnmatch.fnmatchcase`
on lower-cased paths, ``**`` spans zero or more directories, and ``{a,b}``
alternatives are expanded up front. Directory results carry a trailing
slash. Symbolic links are never followed.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import threading
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Sequence

from wayfinder.exceptions import PatternRejectedError

LOGGER = logging.getLogger(__name__)

MAX_BRACE_EXPANSIONS = 256


def _find_brace_group(pattern: str) -> tuple[int, int, list[str]] | None:
    """Locate the first balanced ``{...}`` group containing a top-level comma."""
    start = pattern.find("{")
    while start != -1:
        depth = 0
        options: list[str] = []
        piece_start = start + 1
        for index in range(start, len(pattern)):
            char = pattern[index]
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    options.append(pattern[piece_start:index])
                    if len(options) > 1:
                        return start, index, options
                    break
            elif char == "," and depth == 1:
                options.append(pattern[piece_start:index])
                piece_start = index + 1
        start = pattern.find("{", start + 1)
    return None


def expand_braces(pattern: str, limit: int = MAX_BRACE_EXPANSIONS) -> list[str]:
    """Expand ``{a,b}`` alternatives, refusing to produce more than ``limit`` patterns."""
    expanded: list[str] = []
    pending = [pattern]
    while pending:
        current = pending.pop()
        group = _find_brace_group(current)
        if group is None:
            if current not in expanded:
                expanded.append(current)
            continue
        start, end, options = group
        prefix, suffix = current[:start], current[end + 1 :]
        for option in reversed(options):
            pending.append(f"{prefix}{option}{suffix}")
        if len(pending) + len(expanded) > limit:
            raise PatternRejectedError(
                "Brace expansion produces too many patterns",
                context={"providedPattern": pattern, "expansionLimit": limit},
                suggestion="Use fewer {a,b} alternatives or split the search into several calls.",
            )
    return expanded


def _split_segments(pattern: str) -> tuple[str, ...]:
    parts: list[str] = []
    for part in pattern.lower().replace("\\", "/").strip("/").split("/"):
        if not part or part == ".":
            continue
        if part == "**" and parts and parts[-1] == "**":
            continue
        parts.append(part)
    return tuple(parts)


@lru_cache(maxsize=4096)
def _match_parts(pattern: tuple[str, ...], parts: tuple[str, ...]) -> bool:
    if not pattern:
        return not parts
    head = pattern[0]
    if head == "**":
        if _match_parts(pattern[1:], parts):
            return True
        return bool(parts) and _match_parts(pattern, parts[1:])
    if not parts:
        return False
    return fnmatch.fnmatchcase(parts[0], head) and _match_parts(pattern[1:], parts[1:])


@dataclass(frozen=True)
class GlobPattern:
    """One brace-free glob compiled into lower-cased path segments."""

    source: str
    segments: tuple[str, ...]

    @classmethod
    def compile(cls, pattern: str) -> "GlobPattern":
        return cls(source=pattern, segments=_split_segments(pattern))

    def matches(self, relative_path: str) -> bool:
        """Return True when the POSIX relative path matches case-insensitively."""
        return _match_parts(self.segments, _split_segments(relative_path))


def compile_patterns(patterns: Iterable[str]) -> list[GlobPattern]:
    """Brace-expand and compile globs; a leading ``!`` is stripped."""
    compiled: list[GlobPattern] = []
    for raw in patterns:
        pattern = raw[1:] if raw.startswith("!") else raw
        if not pattern:
            continue
        compiled.extend(GlobPattern.compile(item) for item in expand_braces(pattern))
    return compiled


def expand(
    root: Path,
    patterns: Sequence[str],
    exclusions: Sequence[str] = (),
    *,
    max_depth: int = 8,
    cancel_event: threading.Event | None = None,
) -> list[str]:
    """Return root-relative POSIX paths matching any pattern and no exclusion.

    Excluded directories are pruned. Unreadable directories are skipped.
    When ``cancel_event`` is set the walk stops and returns what it has.
    """
    includes = compile_patterns(patterns)
    excludes = compile_patterns(exclusions)
    matches: list[str] = []
    stack: list[tuple[Path, str, int]] = [(root, "", 0)]

    while stack:
        directory, prefix, depth = stack.pop()
        try:
            with os.scandir(directory) as iterator:
                entries = sorted(iterator, key=lambda item: item.name)
        except OSError as exc:
            LOGGER.debug("Skipping unreadable directory %s: %s", directory, exc)
            continue

        for entry in entries:
            if cancel_event is not None and cancel_event.is_set():
                LOGGER.debug("Glob expansion under %s cancelled", root)
                return matches
            relative = f"{prefix}/{entry.name}" if prefix else entry.name
            if any(pattern.matches(relative) for pattern in excludes):
                continue
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            if any(pattern.matches(relative) for pattern in includes):
                matches.append(f"{relative}/" if is_dir else relative)
            if is_dir and depth + 1 < max_depth:
                stack.append((Path(entry.path), relative, depth + 1))

    matches.sort()
    return matches


__all__ = [
    "GlobPattern",
    "MAX_BRACE_EXPANSIONS",
    "compile_patterns",
    "expand",
    "expand_braces",
]
