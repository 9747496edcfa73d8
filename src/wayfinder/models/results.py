"""Operation results returned by list, tree, stats and find."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from wayfinder.models.entries import DirectoryEntry, DirectoryStats, FindResultEntry, TreeNode
from wayfinder.utils.formatting import format_bytes, format_listing, format_matches, format_tree


@dataclass(slots=True)
class ListResult:
    path: str
    items: list[DirectoryEntry]
    respect_gitignore: bool
    warning: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def formatted(self) -> str:
        return format_listing(self.items)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "operation": "list",
            "path": self.path,
            "count": self.count,
            "items": [item.to_dict() for item in self.items],
            "respectGitignore": self.respect_gitignore,
            "formatted": self.formatted,
        }
        if self.warning:
            payload["warning"] = self.warning
        return payload


@dataclass(slots=True)
class TreeResult:
    path: str
    max_depth: int
    tree: list[TreeNode]
    include_hidden: bool
    include_size: bool
    respect_gitignore: bool
    warning: Optional[str] = None

    @property
    def formatted(self) -> str:
        return format_tree(self.tree)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "operation": "tree",
            "path": self.path,
            "maxDepth": self.max_depth,
            "includeHidden": self.include_hidden,
            "includeSize": self.include_size,
            "respectGitignore": self.respect_gitignore,
            "tree": [node.to_dict() for node in self.tree],
            "formatted": self.formatted,
        }
        if self.warning:
            payload["warning"] = self.warning
        return payload


@dataclass(slots=True)
class StatsResult:
    path: str
    stats: DirectoryStats
    include_hidden: bool
    respect_gitignore: bool
    warning: Optional[str] = None

    @property
    def formatted(self) -> str:
        stats = self.stats
        hidden_state = "(included)" if self.include_hidden else "(excluded)"
        ignored_state = "(excluded)" if self.respect_gitignore else "(would be excluded)"
        return "\n".join(
            [
                f"Directory Statistics for: {self.path}",
                f"- Total Files: {stats.total_files}",
                f"- Total Directories: {stats.total_directories}",
                f"- Total Size: {format_bytes(stats.total_size)}",
                f"- Hidden Items: {stats.hidden_items} {hidden_state}",
                f"- Ignored Items: {stats.ignored_items} {ignored_state}",
            ]
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "operation": "stats",
            "path": self.path,
            "includeHidden": self.include_hidden,
            "respectGitignore": self.respect_gitignore,
            "stats": self.stats.to_dict(),
            "formatted": self.formatted,
        }
        if self.warning:
            payload["warning"] = self.warning
        return payload


@dataclass(slots=True)
class FindResult:
    search_path: str
    pattern: str
    preprocessed_patterns: list[str]
    exclude_patterns: list[str]
    include_hidden: bool
    respect_gitignore: bool
    total_found: int
    results: list[FindResultEntry] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.results)

    @property
    def formatted(self) -> str:
        return format_matches(self.results)

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": "find",
            "searchPath": self.search_path,
            "pattern": self.pattern,
            "preprocessedPatterns": list(self.preprocessed_patterns),
            "excludePatterns": list(self.exclude_patterns),
            "includeHidden": self.include_hidden,
            "respectGitignore": self.respect_gitignore,
            "count": self.count,
            "totalFound": self.total_found,
            "results": [result.to_dict() for result in self.results],
            "formatted": self.formatted,
        }


__all__ = ["ListResult", "TreeResult", "StatsResult", "FindResult"]
