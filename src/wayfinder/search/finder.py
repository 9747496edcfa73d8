"""Pattern-driven file search with ignore filtering and a wall-clock timeout."""

from __future__ import annotations

import concurrent.futures
import logging
import threading
from pathlib import Path
from typing import Sequence

from wayfinder.config import (
    DEFAULT_SEARCH_LIMITS,
    DEFAULT_WALK_BUDGET,
    FIND_DEFAULT_EXCLUDED_DIRS,
    GITIGNORE_SEARCH_LEVELS,
    HIDDEN_CATCH_ALL_EXCLUSION,
    IMPORTANT_HIDDEN_FILES,
    SearchLimits,
    WalkBudget,
)
from wayfinder.exceptions import SearchTimeoutError, UsageError
from wayfinder.filters.entry_filters import is_always_ignored
from wayfinder.filters.ignore_rules import build_ignore_rule_set
from wayfinder.models.entries import FindResultEntry
from wayfinder.models.results import FindResult
from wayfinder.search import glob_engine
from wayfinder.search.pattern_sanitizer import SanitizedPattern, sanitize_pattern

LOGGER = logging.getLogger(__name__)

DEFAULT_EXCLUSIONS: tuple[str, ...] = tuple(f"!**/{name}/**" for name in FIND_DEFAULT_EXCLUDED_DIRS)


def build_exclusions(exclude_patterns: Sequence[str] | None, include_hidden: bool) -> list[str]:
    """Return default, caller and hidden-file exclusions, each in ``!pattern`` form."""
    exclusions = list(DEFAULT_EXCLUSIONS)
    for pattern in exclude_patterns or ():
        pattern = pattern.strip()
        if not pattern:
            continue
        exclusions.append(pattern if pattern.startswith("!") else f"!{pattern}")
    if not include_hidden:
        exclusions.append(HIDDEN_CATCH_ALL_EXCLUSION)
    return exclusions


def _timeout_for(sanitized: SanitizedPattern, limits: SearchLimits) -> float:
    if sanitized.is_simple(limits):
        return limits.simple_timeout_seconds
    return limits.complex_timeout_seconds


def _expand_with_timeout(
    root: Path,
    sanitized: SanitizedPattern,
    exclusions: Sequence[str],
    *,
    max_depth: int,
    limits: SearchLimits,
) -> list[str]:
    timeout = _timeout_for(sanitized, limits)
    cancel_event = threading.Event()
    executor = concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="wayfinder-find")
    future = executor.submit(
        glob_engine.expand,
        root,
        sanitized.patterns,
        list(exclusions),
        max_depth=max_depth,
        cancel_event=cancel_event,
    )
    try:
        return future.result(timeout=timeout)
    except concurrent.futures.TimeoutError as exc:
        cancel_event.set()
        LOGGER.warning("Pattern search for %r timed out after %.1fs", sanitized.original, timeout)
        raise SearchTimeoutError(
            "Pattern search timeout",
            context={
                "providedPattern": sanitized.original,
                "timeoutSeconds": timeout,
            },
            suggestion=(
                f'Searching for "{sanitized.original}" took longer than {timeout:g}s. '
                "Narrow the search path or use a more specific pattern such as **/*.ext."
            ),
        ) from exc
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


def find(
    root: Path,
    pattern: str | None,
    exclude_patterns: Sequence[str] | None = None,
    *,
    include_hidden: bool = False,
    respect_gitignore: bool = True,
    budget: WalkBudget = DEFAULT_WALK_BUDGET,
    limits: SearchLimits = DEFAULT_SEARCH_LIMITS,
    gitignore_levels: int = GITIGNORE_SEARCH_LEVELS,
) -> FindResult:
    """Search ``root`` for paths matching ``pattern``.

    Raises:
        PatternRejectedError: when the pattern fails sanitisation.
        UsageError: when patterns plus exclusions exceed the total pattern limit.
        SearchTimeoutError: when expansion does not finish in time.
    """
    sanitized = sanitize_pattern(pattern, limits)
    exclusions = build_exclusions(exclude_patterns, include_hidden)

    total_patterns = len(sanitized.patterns) + len(exclusions)
    if total_patterns > limits.max_total_patterns:
        raise UsageError(
            "Too many total patterns",
            context={"totalPatterns": total_patterns},
            suggestion=(
                f"Total pattern count ({total_patterns}) exceeds safe limit. "
                "Please use fewer, broader patterns."
            ),
        )

    matches = _expand_with_timeout(
        root,
        sanitized,
        exclusions,
        max_depth=budget.find_max_depth,
        limits=limits,
    )
    LOGGER.info("Find operation: pattern=%r found %d results", sanitized.original, len(matches))

    if not include_hidden:
        readded = [
            name
            for name in IMPORTANT_HIDDEN_FILES
            if name not in matches and (root / name).is_file()
        ]
        if readded:
            matches = sorted(matches + readded)
    total_found = len(matches)

    rules = build_ignore_rule_set(root, max_levels=gitignore_levels) if respect_gitignore else None
    results: list[FindResultEntry] = []
    for match in matches:
        is_dir = match.endswith("/")
        clean = match.rstrip("/")
        if any(is_always_ignored(part) for part in clean.split("/")):
            continue
        if rules is not None and rules.is_ignored(clean, is_directory=is_dir):
            continue
        results.append(
            FindResultEntry(
                path=clean,
                type="directory" if is_dir else "file",
                relative_path=match,
                absolute_path=str(root / clean),
            )
        )

    return FindResult(
        search_path=str(root),
        pattern=sanitized.original,
        preprocessed_patterns=list(sanitized.patterns),
        exclude_patterns=list(exclude_patterns or ()),
        include_hidden=include_hidden,
        respect_gitignore=respect_gitignore,
        total_found=total_found,
        results=results,
    )


__all__ = ["DEFAULT_EXCLUSIONS", "build_exclusions", "find"]
