"""Validated parameter payloads for each Wayfinder action."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _ActionParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="ignore")

    path: str | None = Field(
        default=None,
        description="Directory path (defaults to the workspace directory).",
    )


class ListParams(_ActionParams):
    """Parameters for a single-level directory listing."""

    include_hidden: bool = Field(
        default=False,
        alias="includeHidden",
        description="Include hidden files and directories (starting with .)",
    )
    include_size: bool = Field(
        default=False,
        alias="includeSize",
        description="Include file sizes in the listing.",
    )
    respect_gitignore: bool = Field(
        default=True,
        alias="respectGitignore",
        description="Whether to respect .gitignore files.",
    )


class TreeParams(ListParams):
    """Parameters for a recursive tree; ``max_depth`` is capped by the dispatcher."""

    max_depth: int | None = Field(
        default=None,
        ge=1,
        alias="maxDepth",
        description="Maximum depth for the tree (1-10, default: 10).",
    )


class StatsParams(_ActionParams):
    """Parameters for aggregate directory statistics."""

    include_hidden: bool = Field(
        default=False,
        alias="includeHidden",
        description="Include hidden files in the totals.",
    )
    respect_gitignore: bool = Field(
        default=True,
        alias="respectGitignore",
        description="Exclude gitignored entries from the totals.",
    )


class FindParams(_ActionParams):
    """Parameters for a pattern search."""

    pattern: str = Field(
        default="",
        description=(
            "Glob pattern; use | to separate alternatives. "
            "Examples: **/*.ts, *config*, src/**/*.test.js"
        ),
    )
    exclude_patterns: list[str] = Field(
        default_factory=list,
        alias="excludePatterns",
        description="Additional glob patterns to exclude from results.",
    )
    include_hidden: bool = Field(
        default=False,
        alias="includeHidden",
        description="Include hidden files and directories in matches.",
    )
    respect_gitignore: bool = Field(
        default=True,
        alias="respectGitignore",
        description="Filter matches through .gitignore rules.",
    )

    @field_validator("exclude_patterns", mode="before")
    @classmethod
    def _ensure_pattern_list(cls, value: Any) -> list[str]:
        """Accept a single pattern string or a list of patterns."""
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value.strip() else []
        if isinstance(value, (list, tuple, set)):
            return [str(item) for item in value if str(item).strip()]
        return value


class InfoParams(_ActionParams):
    """Parameters for single-path metadata."""


class CurrentParams(_ActionParams):
    """The current action takes no options besides an ignored path."""


class ReadParams(_ActionParams):
    """Parameters for reading a UTF-8 text file."""

    path: str | None = Field(default=None, description="File path to read (required).")


class EnvParams(_ActionParams):
    """Parameters for project and system environment details."""

    working_dir: str | None = Field(
        default=None,
        alias="workingDir",
        description="Directory to inspect (defaults to path, then the workspace directory).",
    )
    include_system: bool = Field(
        default=True,
        alias="includeSystem",
        description="Include platform, memory, runtime and safe environment variables.",
    )
    include_project: bool = Field(
        default=True,
        alias="includeProject",
        description="Include .chara.json contents and common project file detection.",
    )


__all__ = [
    "CurrentParams",
    "EnvParams",
    "FindParams",
    "InfoParams",
    "ListParams",
    "ReadParams",
    "StatsParams",
    "TreeParams",
]
