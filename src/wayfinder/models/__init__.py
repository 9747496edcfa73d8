"""
Models package for Wayfinder.

- Entries: directory entries, tree nodes, find matches, stats and file info
- Results: the per-operation result objects and their serialized shapes
- Tool params: pydantic models validating caller parameters
"""

from .entries import DirectoryEntry, DirectoryStats, FileInfo, FindResultEntry, TreeNode
from .results import FindResult, ListResult, StatsResult, TreeResult
from .tool_params import (
    CurrentParams,
    EnvParams,
    FindParams,
    InfoParams,
    ListParams,
    ReadParams,
    StatsParams,
    TreeParams,
)

__all__ = [
    'DirectoryEntry',
    'DirectoryStats',
    'FileInfo',
    'FindResultEntry',
    'TreeNode',
    'FindResult',
    'ListResult',
    'StatsResult',
    'TreeResult',
    'CurrentParams',
    'EnvParams',
    'FindParams',
    'InfoParams',
    'ListParams',
    'ReadParams',
    'StatsParams',
    'TreeParams',
]
