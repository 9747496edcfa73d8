"""Tool utilities for Wayfinder."""

from __future__ import annotations

from .directory_walker import DirectoryWalker
from .environment import collect_environment_info
from .tool_manager import FileSystemTools

__all__ = [
    "DirectoryWalker",
    "FileSystemTools",
    "collect_environment_info",
]
