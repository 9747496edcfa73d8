"""Bounded directory traversal backing the list, tree and stats actions."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from wayfinder.config import DEFAULT_WALK_BUDGET, GITIGNORE_SEARCH_LEVELS, WalkBudget
from wayfinder.exceptions import PathAccessError, ResourceLimitError, UsageError
from wayfinder.filters.entry_filters import (
    admit_entry,
    is_always_ignored,
    is_hidden,
    is_important_hidden_file,
)
from wayfinder.filters.ignore_rules import IgnoreRuleSet, build_ignore_rule_set
from wayfinder.models.entries import DirectoryEntry, DirectoryStats, TreeNode
from wayfinder.models.results import ListResult, StatsResult, TreeResult

LOGGER = logging.getLogger(__name__)

__all__ = ["DirectoryWalker"]


def _scan_sorted(directory: Path) -> list[os.DirEntry[str]]:
    with os.scandir(directory) as iterator:
        return sorted(iterator, key=lambda entry: entry.name)


def _entry_is_dir(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def _file_size(entry: os.DirEntry[str]) -> int | None:
    try:
        return entry.stat(follow_symlinks=False).st_size
    except OSError as exc:
        LOGGER.debug("Unable to stat %s: %s", entry.path, exc)
        return None


def _join(prefix: str, name: str) -> str:
    return f"{prefix}/{name}" if prefix else name


class DirectoryWalker:
    """Walk directories under a :class:`WalkBudget`.

    Each call builds its own ignore rules; the walker keeps no state between
    calls beyond its budget.
    """

    def __init__(
        self,
        budget: WalkBudget = DEFAULT_WALK_BUDGET,
        gitignore_levels: int = GITIGNORE_SEARCH_LEVELS,
    ) -> None:
        self.budget = budget
        self.gitignore_levels = gitignore_levels

    def _rules_for(self, root: Path, respect_gitignore: bool) -> IgnoreRuleSet | None:
        if not respect_gitignore:
            return None
        return build_ignore_rule_set(root, max_levels=self.gitignore_levels)

    def _read_root(self, root: Path, operation: str) -> list[os.DirEntry[str]]:
        try:
            return _scan_sorted(root)
        except OSError as exc:
            raise PathAccessError(
                f"Failed to read directory: {exc.strerror or exc}",
                context={"operation": operation, "path": str(root)},
                suggestion="Check that the directory exists and is readable.",
            ) from exc

    # ------------------------------------------------------------------ #
    # list
    # ------------------------------------------------------------------ #
    def list_directory(
        self,
        root: Path,
        *,
        include_hidden: bool = False,
        include_size: bool = False,
        respect_gitignore: bool = True,
    ) -> ListResult:
        """Return the admitted children of ``root``, one level deep."""
        entries = self._read_root(root, "list")
        rules = self._rules_for(root, respect_gitignore)
        limit = self.budget.list_entry_limit
        warning = None
        if len(entries) > limit:
            LOGGER.warning("Directory %s has %d entries, limiting to %d", root, len(entries), limit)
            warning = (
                f"Directory contains {len(entries)} entries, showing first {limit}. "
                "Use 'find' action with patterns for more specific results."
            )

        items: list[DirectoryEntry] = []
        for entry in entries[:limit]:
            is_dir = _entry_is_dir(entry)
            if not admit_entry(
                entry.name,
                entry.name,
                is_directory=is_dir,
                include_hidden=include_hidden,
                rules=rules,
            ):
                LOGGER.debug("Skipping %s", entry.path)
                continue
            item = DirectoryEntry(
                name=entry.name,
                type="directory" if is_dir else "file",
                hidden=is_hidden(entry.name),
                ignored=False if respect_gitignore else None,
            )
            if include_size and not is_dir:
                item.size = _file_size(entry)
            items.append(item)

        return ListResult(
            path=str(root),
            items=items,
            respect_gitignore=respect_gitignore,
            warning=warning,
        )

    # ------------------------------------------------------------------ #
    # tree
    # ------------------------------------------------------------------ #
    def build_tree(
        self,
        root: Path,
        *,
        max_depth: int | None = None,
        include_hidden: bool = False,
        include_size: bool = False,
        respect_gitignore: bool = True,
    ) -> TreeResult:
        """Return nested nodes below ``root``.

        The effective depth never exceeds the budget's tree depth. Directories
        at the depth limit, and directories that cannot be read, are returned
        with empty children.
        """
        if max_depth is not None and max_depth < 1:
            raise UsageError(
                "maxDepth must be at least 1",
                context={"providedMaxDepth": max_depth},
                suggestion="Use a maxDepth between 1 and 10.",
            )
        ceiling = self.budget.max_tree_depth
        effective_depth = min(max_depth or ceiling, ceiling)
        entries = self._read_root(root, "tree")
        rules = self._rules_for(root, respect_gitignore)
        limit = self.budget.tree_entry_limit
        truncated: list[str] = []

        def visit(directory: Path, prefix: str, scanned: list[os.DirEntry[str]], depth: int) -> list[TreeNode]:
            if len(scanned) > limit:
                LOGGER.warning(
                    "Directory %s has %d entries, limiting to %d", directory, len(scanned), limit
                )
                truncated.append(prefix or ".")
            nodes: list[TreeNode] = []
            for entry in scanned[:limit]:
                is_dir = _entry_is_dir(entry)
                relative = _join(prefix, entry.name)
                if not admit_entry(
                    entry.name,
                    relative,
                    is_directory=is_dir,
                    include_hidden=include_hidden,
                    rules=rules,
                ):
                    continue
                node = TreeNode(
                    name=entry.name,
                    type="directory" if is_dir else "file",
                    hidden=is_hidden(entry.name),
                    ignored=False if respect_gitignore else None,
                )
                if include_size and not is_dir:
                    node.size = _file_size(entry)
                if is_dir:
                    node.children = []
                    if depth < effective_depth:
                        child_path = Path(entry.path)
                        try:
                            children = _scan_sorted(child_path)
                        except OSError as exc:
                            LOGGER.debug("Unable to read %s: %s", child_path, exc)
                        else:
                            node.children = visit(child_path, relative, children, depth + 1)
                nodes.append(node)
            return nodes

        tree = visit(root, "", entries, 1)
        warning = None
        if truncated:
            warning = (
                f"{len(truncated)} director{'y' if len(truncated) == 1 else 'ies'} exceeded "
                f"{limit} entries and were truncated: {', '.join(truncated[:5])}"
            )
        return TreeResult(
            path=str(root),
            max_depth=effective_depth,
            tree=tree,
            include_hidden=include_hidden,
            include_size=include_size,
            respect_gitignore=respect_gitignore,
            warning=warning,
        )

    # ------------------------------------------------------------------ #
    # stats
    # ------------------------------------------------------------------ #
    def collect_stats(
        self,
        root: Path,
        *,
        include_hidden: bool = False,
        respect_gitignore: bool = True,
    ) -> StatsResult:
        """Aggregate counts for everything below ``root``.

        Ignore rules are always evaluated so ``ignored_items`` reports what
        would be filtered even when ``respect_gitignore`` is False.
        """
        self._read_root(root, "stats")
        rules = build_ignore_rule_set(root, max_levels=self.gitignore_levels)
        stats = DirectoryStats()
        truncated: list[str] = []
        warnings: list[str] = []
        try:
            self._accumulate(root, rules, stats, include_hidden, respect_gitignore, truncated)
        except ResourceLimitError as exc:
            LOGGER.warning("Stats walk under %s stopped early: %s", root, exc)
            warnings.append(
                f"Statistics collection was limited to {self.budget.stats_directory_limit} "
                "directories to prevent system resource issues. Results may be incomplete "
                "for very large directory structures."
            )
        if truncated:
            warnings.append(
                f"{len(truncated)} director{'y' if len(truncated) == 1 else 'ies'} exceeded "
                f"{self.budget.list_entry_limit} entries and were only partially counted: "
                f"{', '.join(truncated[:5])}"
            )
        warning = " ".join(warnings) or None
        return StatsResult(
            path=str(root),
            stats=stats,
            include_hidden=include_hidden,
            respect_gitignore=respect_gitignore,
            warning=warning,
        )

    def _accumulate(
        self,
        root: Path,
        rules: IgnoreRuleSet,
        stats: DirectoryStats,
        include_hidden: bool,
        respect_gitignore: bool,
        truncated: list[str],
    ) -> None:
        limit = self.budget.stats_directory_limit
        entry_limit = self.budget.list_entry_limit
        visited = 0
        stack: list[tuple[Path, str]] = [(root, "")]

        while stack:
            directory, prefix = stack.pop()
            if visited >= limit:
                raise ResourceLimitError(
                    "Directory visit limit reached",
                    context={"path": str(directory), "directoryLimit": limit},
                )
            visited += 1
            try:
                entries = _scan_sorted(directory)
            except OSError as exc:
                LOGGER.debug("Skipping unreadable directory %s: %s", directory, exc)
                continue
            if len(entries) > entry_limit:
                LOGGER.warning(
                    "Directory %s has %d entries, counting first %d", directory, len(entries), entry_limit
                )
                truncated.append(prefix or ".")

            for entry in entries[:entry_limit]:
                if is_always_ignored(entry.name):
                    continue
                is_dir = _entry_is_dir(entry)
                relative = _join(prefix, entry.name)
                ignored = rules.is_ignored(relative, is_directory=is_dir)

                if is_hidden(entry.name):
                    stats.hidden_items += 1
                    if not include_hidden and not is_important_hidden_file(entry.name):
                        continue
                if ignored:
                    stats.ignored_items += 1

                counted = not ignored or not respect_gitignore
                if is_dir:
                    stack.append((Path(entry.path), relative))
                    if counted:
                        stats.total_directories += 1
                elif counted:
                    stats.total_files += 1
                    stats.total_size += _file_size(entry) or 0
