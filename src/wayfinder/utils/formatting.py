"""Deterministic text renderings for tool results."""

from __future__ import annotations

from typing import Iterable, TYPE_CHECKING

from wayfinder.config import EMPTY_DIRECTORY_TEXT, NO_MATCHES_TEXT

if TYPE_CHECKING:
    from wayfinder.models.entries import DirectoryEntry, FindResultEntry, TreeNode


def format_bytes(size_bytes: float) -> str:
    """Format file size in human-readable format.

    :param size_bytes: Size in bytes
    :return: Human-readable string (e.g., '512 B', '239.9 KB', '1.2 MB')
    """
    if size_bytes < 1024:
        return f"{int(size_bytes)} B"
    for unit in ["KB", "MB", "GB", "TB"]:
        size_bytes /= 1024.0
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
    return f"{size_bytes / 1024.0:.1f} PB"


def type_marker(entry_type: str) -> str:
    return "[DIR]" if entry_type == "directory" else "[FILE]"


def format_entry_line(entry: "DirectoryEntry") -> str:
    """Render ``[TYPE] name (size) (hidden) (ignored)`` for one entry."""
    parts = [f"{type_marker(entry.type)} {entry.name}"]
    if entry.size is not None:
        parts.append(f"({format_bytes(entry.size)})")
    if entry.hidden:
        parts.append("(hidden)")
    if entry.ignored:
        parts.append("(ignored)")
    return " ".join(parts)


def format_listing(entries: Iterable["DirectoryEntry"]) -> str:
    lines = [format_entry_line(entry) for entry in entries]
    return "\n".join(lines) if lines else EMPTY_DIRECTORY_TEXT


def format_tree(nodes: Iterable["TreeNode"], indent: str = "  ") -> str:
    """Render nested nodes one per line, children indented under their parent."""
    lines: list[str] = []

    def visit(items: Iterable["TreeNode"], level: int) -> None:
        for node in items:
            lines.append(f"{indent * level}{format_entry_line(node)}")
            if node.children:
                visit(node.children, level + 1)

    visit(nodes, 0)
    return "\n".join(lines) if lines else EMPTY_DIRECTORY_TEXT


def format_matches(results: Iterable["FindResultEntry"]) -> str:
    lines = [f"{type_marker(result.type)} {result.path}" for result in results]
    return "\n".join(lines) if lines else NO_MATCHES_TEXT


__all__ = [
    "format_bytes",
    "format_entry_line",
    "format_listing",
    "format_matches",
    "format_tree",
    "type_marker",
]
