"""Entry records produced by the directory walker and the finder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional

EntryType = Literal["file", "directory"]


@dataclass(slots=True)
class DirectoryEntry:
    """One admitted child of a listed directory."""

    name: str
    type: EntryType
    hidden: bool
    size: Optional[int] = None
    ignored: Optional[bool] = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name, "type": self.type, "hidden": self.hidden}
        if self.size is not None:
            payload["size"] = self.size
        if self.ignored is not None:
            payload["ignored"] = self.ignored
        return payload


@dataclass(slots=True)
class TreeNode:
    """Directory entry with nested children; ``children`` is None for files."""

    name: str
    type: EntryType
    hidden: bool
    size: Optional[int] = None
    ignored: Optional[bool] = None
    children: Optional[list["TreeNode"]] = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name, "type": self.type, "hidden": self.hidden}
        if self.size is not None:
            payload["size"] = self.size
        if self.ignored is not None:
            payload["ignored"] = self.ignored
        if self.children is not None:
            payload["children"] = [child.to_dict() for child in self.children]
        return payload


@dataclass(slots=True)
class FindResultEntry:
    """A single find match; ``path`` never carries a trailing separator."""

    path: str
    type: EntryType
    relative_path: str
    absolute_path: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "type": self.type,
            "relativePath": self.relative_path,
            "absolutePath": self.absolute_path,
        }


@dataclass(slots=True)
class DirectoryStats:
    """Running totals collected by the stats walk.

    ``hidden_items`` and ``ignored_items`` count every occurrence seen, while
    the totals only include what the caller asked for.
    """

    total_files: int = 0
    total_directories: int = 0
    total_size: int = 0
    hidden_items: int = 0
    ignored_items: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "totalFiles": self.total_files,
            "totalDirectories": self.total_directories,
            "totalSize": self.total_size,
            "hiddenItems": self.hidden_items,
            "ignoredItems": self.ignored_items,
        }


@dataclass(slots=True)
class FileInfo:
    """Metadata for a single file or directory."""

    path: str
    size: int
    created: Optional[str]
    modified: Optional[str]
    accessed: Optional[str]
    is_directory: bool
    is_file: bool
    permissions: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "created": self.created,
            "modified": self.modified,
            "accessed": self.accessed,
            "isDirectory": self.is_directory,
            "isFile": self.is_file,
            "permissions": self.permissions,
        }


__all__ = [
    "EntryType",
    "DirectoryEntry",
    "TreeNode",
    "FindResultEntry",
    "DirectoryStats",
    "FileInfo",
]
