"""Action dispatcher exposing Wayfinder's read-only filesystem tools."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Mapping, Type

from pydantic import BaseModel, ValidationError

from wayfinder.config import (
    DEFAULT_SEARCH_LIMITS,
    DEFAULT_WALK_BUDGET,
    GITIGNORE_SEARCH_LEVELS,
    SearchLimits,
    WalkBudget,
)
from wayfinder.exceptions import PathAccessError, UsageError, WayfinderError
from wayfinder.models.entries import FileInfo
from wayfinder.models.tool_params import (
    CurrentParams,
    EnvParams,
    FindParams,
    InfoParams,
    ListParams,
    ReadParams,
    StatsParams,
    TreeParams,
)
from wayfinder.search import finder
from wayfinder.tools.anthropic_tool_builder import build_action_tool_schema
from wayfinder.tools.directory_walker import DirectoryWalker
from wayfinder.tools.environment import collect_environment_info
from wayfinder.utils.paths import resolve_directory
from wayfinder.utils.settings import budget_from_settings, limits_from_settings, load_settings
from wayfinder.utils.suggestions import suggest_action

LOGGER = logging.getLogger(__name__)

__all__ = ["ACTION_MODELS", "FileSystemTools", "TOOL_DESCRIPTION", "TOOL_NAME"]

ACTION_MODELS: dict[str, Type[BaseModel]] = {
    "list": ListParams,
    "tree": TreeParams,
    "stats": StatsParams,
    "find": FindParams,
    "current": CurrentParams,
    "info": InfoParams,
    "read": ReadParams,
    "env": EnvParams,
}

TOOL_NAME = "file_system"
TOOL_DESCRIPTION = """Read-only file system exploration tool.

Operations:
- list: flat listing of one directory with type indicators and optional sizes
- tree: recursive tree with a depth limit (1-10)
- stats: file, directory, size, hidden and ignored counts
- find: glob search, use | to separate alternatives (e.g. **/*.ts|**/*.tsx)
- current: the working directory
- info: metadata for a single file or directory
- read: contents of a UTF-8 text file
- env: project configuration from .chara.json, common project files and system details

.gitignore rules are respected by default; .chara, node_modules and .git are always excluded."""


def _format_timestamp(timestamp: float | None) -> str | None:
    """Return an ISO-8601 timestamp string for the provided epoch value."""
    if timestamp is None:
        return None
    try:
        return (
            datetime.fromtimestamp(timestamp, tz=timezone.utc)
            .replace(microsecond=0)
            .isoformat()
            .replace("+00:00", "Z")
        )
    except (OSError, OverflowError, ValueError) as exc:
        LOGGER.debug("Unable to format timestamp %s: %s", timestamp, exc)
        return None


def _validation_error(action: str, exc: ValidationError) -> UsageError:
    errors = [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]
    first = errors[0] if errors else {"field": "", "message": str(exc)}
    return UsageError(
        f"Invalid parameters for '{action}'",
        context={"action": action, "errors": errors},
        suggestion=f"Fix '{first['field']}': {first['message']}",
    )


class FileSystemTools:
    """Validate parameters, run one action, and shape its result.

    In ``return_error_objects`` mode every :class:`WayfinderError` is returned
    as ``{"error": True, "message": ..., "suggestion": ..., ...}`` instead of
    being raised.
    """

    def __init__(
        self,
        workspace_dir: str | os.PathLike[str] | None = None,
        *,
        return_error_objects: bool = False,
        budget: WalkBudget = DEFAULT_WALK_BUDGET,
        limits: SearchLimits = DEFAULT_SEARCH_LIMITS,
        gitignore_levels: int = GITIGNORE_SEARCH_LEVELS,
    ) -> None:
        resolved = Path(workspace_dir or Path.cwd()).expanduser().resolve()
        if not resolved.is_dir():
            raise ValueError(f"Workspace directory does not exist: {workspace_dir}")
        self.workspace_dir = resolved
        self.return_error_objects = return_error_objects
        self.budget = budget
        self.limits = limits
        self.gitignore_levels = gitignore_levels
        self.walker = DirectoryWalker(budget, gitignore_levels)
        self._handlers: dict[str, Callable[[BaseModel], dict[str, Any]]] = {
            "list": self._run_list,
            "tree": self._run_tree,
            "stats": self._run_stats,
            "find": self._run_find,
            "current": self._run_current,
            "info": self._run_info,
            "read": self._run_read,
            "env": self._run_env,
        }
        LOGGER.info("FileSystemTools workspace set to %s", self.workspace_dir)

    @classmethod
    def from_settings(
        cls,
        workspace_dir: str | os.PathLike[str] | None = None,
        settings: Mapping[str, Any] | None = None,
    ) -> "FileSystemTools":
        """Build an instance using ``~/.wayfinder/settings.json`` (or ``settings``)."""
        loaded = dict(settings) if settings is not None else load_settings()
        return cls(
            workspace_dir,
            return_error_objects=bool(loaded.get("return_error_objects", False)),
            budget=budget_from_settings(loaded),
            limits=limits_from_settings(loaded),
            gitignore_levels=int(loaded.get("gitignore_search_levels", GITIGNORE_SEARCH_LEVELS)),
        )

    @property
    def valid_actions(self) -> list[str]:
        return list(self._handlers)

    def tool_schema(self) -> dict[str, Any]:
        """Return the Anthropic tool schema advertising every action."""
        return build_action_tool_schema(ACTION_MODELS, TOOL_NAME, TOOL_DESCRIPTION)

    # ------------------------------------------------------------------ #
    # Public entry points
    # ------------------------------------------------------------------ #
    def execute(self, action: str, **params: Any) -> dict[str, Any]:
        """Dispatch ``action`` with camelCase or snake_case ``params``."""
        LOGGER.info("🔧 TOOL CALLED: execute(action=%s, params=%s)", action, params)
        try:
            normalized = (action or "").strip().lower()
            if normalized not in self._handlers:
                raise UsageError(
                    "Invalid action provided",
                    context={"providedAction": action, "validActions": self.valid_actions},
                    suggestion=suggest_action(action or "", self.valid_actions),
                )
            return self._dispatch(normalized, params)
        except WayfinderError as exc:
            return self._handle_error(exc)

    def list_directory(self, **params: Any) -> dict[str, Any]:
        LOGGER.info("🔧 TOOL CALLED: list_directory(%s)", params)
        return self._guarded("list", params)

    def directory_tree(self, **params: Any) -> dict[str, Any]:
        LOGGER.info("🔧 TOOL CALLED: directory_tree(%s)", params)
        return self._guarded("tree", params)

    def directory_stats(self, **params: Any) -> dict[str, Any]:
        LOGGER.info("🔧 TOOL CALLED: directory_stats(%s)", params)
        return self._guarded("stats", params)

    def find_files(self, **params: Any) -> dict[str, Any]:
        LOGGER.info("🔧 TOOL CALLED: find_files(%s)", params)
        return self._guarded("find", params)

    def current_directory(self) -> dict[str, Any]:
        LOGGER.info("🔧 TOOL CALLED: current_directory")
        return self._guarded("current", {})

    def file_info(self, **params: Any) -> dict[str, Any]:
        LOGGER.info("🔧 TOOL CALLED: file_info(%s)", params)
        return self._guarded("info", params)

    def read_file(self, **params: Any) -> dict[str, Any]:
        LOGGER.info("🔧 TOOL CALLED: read_file(%s)", params)
        return self._guarded("read", params)

    def environment_info(self, **params: Any) -> dict[str, Any]:
        LOGGER.info("🔧 TOOL CALLED: environment_info(%s)", params)
        return self._guarded("env", params)

    # ------------------------------------------------------------------ #
    # Dispatch helpers
    # ------------------------------------------------------------------ #
    def _guarded(self, action: str, params: Mapping[str, Any]) -> dict[str, Any]:
        try:
            return self._dispatch(action, params)
        except WayfinderError as exc:
            return self._handle_error(exc)

    def _dispatch(self, action: str, params: Mapping[str, Any]) -> dict[str, Any]:
        model = ACTION_MODELS[action]
        try:
            validated = model.model_validate(dict(params))
        except ValidationError as exc:
            raise _validation_error(action, exc) from exc
        return self._handlers[action](validated)

    def _handle_error(self, exc: WayfinderError) -> dict[str, Any]:
        LOGGER.warning("Wayfinder action failed: %s", exc)
        if self.return_error_objects:
            return exc.to_dict()
        raise exc

    def _directory(self, path: str | None, operation: str) -> Path:
        return resolve_directory(path, operation=operation, base_dir=self.workspace_dir)

    def _run_list(self, params: ListParams) -> dict[str, Any]:
        result = self.walker.list_directory(
            self._directory(params.path, "list"),
            include_hidden=params.include_hidden,
            include_size=params.include_size,
            respect_gitignore=params.respect_gitignore,
        )
        return result.to_dict()

    def _run_tree(self, params: TreeParams) -> dict[str, Any]:
        max_depth = params.max_depth
        if max_depth is not None and max_depth > self.budget.max_tree_depth:
            raise UsageError(
                "maxDepth too large",
                context={"providedMaxDepth": max_depth, "recommendedMaxDepth": min(max_depth, 5)},
                suggestion=(
                    f"maxDepth of {max_depth} is too large. Please use a value between "
                    f"1-{self.budget.max_tree_depth} to prevent system resource issues."
                ),
            )
        result = self.walker.build_tree(
            self._directory(params.path, "tree"),
            max_depth=max_depth,
            include_hidden=params.include_hidden,
            include_size=params.include_size,
            respect_gitignore=params.respect_gitignore,
        )
        return result.to_dict()

    def _run_stats(self, params: StatsParams) -> dict[str, Any]:
        result = self.walker.collect_stats(
            self._directory(params.path, "stats"),
            include_hidden=params.include_hidden,
            respect_gitignore=params.respect_gitignore,
        )
        return result.to_dict()

    def _run_find(self, params: FindParams) -> dict[str, Any]:
        result = finder.find(
            self._directory(params.path, "find"),
            params.pattern,
            params.exclude_patterns,
            include_hidden=params.include_hidden,
            respect_gitignore=params.respect_gitignore,
            budget=self.budget,
            limits=self.limits,
            gitignore_levels=self.gitignore_levels,
        )
        return result.to_dict()

    def _run_current(self, params: CurrentParams) -> dict[str, Any]:
        cwd = str(self.workspace_dir)
        return {"operation": "current", "path": cwd, "formatted": f"Current directory: {cwd}"}

    def _required_path(self, path: str | None, action: str, suggestion: str) -> Path:
        if not path:
            raise UsageError(
                f"Path is required for '{action}'",
                context={"action": action},
                suggestion=suggestion,
            )
        candidate = Path(path).expanduser()
        if not candidate.is_absolute():
            candidate = self.workspace_dir / candidate
        return candidate

    def _run_info(self, params: InfoParams) -> dict[str, Any]:
        candidate = self._required_path(params.path, "info", "Pass the file or directory path to inspect.")
        try:
            stats = candidate.stat()
        except OSError as exc:
            raise PathAccessError(
                f"Failed to get file info: {exc.strerror or exc}",
                context={"operation": "info", "path": str(candidate)},
                suggestion="Check the path and try again.",
            ) from exc

        info = FileInfo(
            path=str(candidate),
            size=stats.st_size,
            created=_format_timestamp(getattr(stats, "st_birthtime", stats.st_ctime)),
            modified=_format_timestamp(stats.st_mtime),
            accessed=_format_timestamp(stats.st_atime),
            is_directory=candidate.is_dir(),
            is_file=candidate.is_file(),
            permissions=oct(stats.st_mode)[-3:],
        )
        details = info.to_dict()
        return {
            "operation": "info",
            "path": info.path,
            **details,
            "formattedInfo": "\n".join(f"{key}: {value}" for key, value in details.items()),
        }

    def _run_read(self, params: ReadParams) -> dict[str, Any]:
        candidate = self._required_path(params.path, "read", "Pass the path of the text file to read.")
        context = {"operation": "read", "path": str(candidate)}
        if candidate.is_dir():
            raise PathAccessError(
                f"Path is a directory, not a file: {params.path}",
                context=context,
                suggestion="Use the 'list' or 'tree' action to explore directories.",
            )
        try:
            size = candidate.stat().st_size
            content = candidate.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise PathAccessError(
                f"File is not valid UTF-8 text: {params.path}",
                context=context,
                suggestion="Only UTF-8 text files can be read; use 'info' for binary files.",
            ) from exc
        except OSError as exc:
            raise PathAccessError(
                f"Failed to read file: {exc.strerror or exc}",
                context=context,
                suggestion="Check the path and try again.",
            ) from exc

        return {
            "operation": "read",
            "path": params.path,
            "absolutePath": str(candidate.resolve()),
            "size": size,
            "content": content,
            "encoding": "utf-8",
            "message": f"Successfully read file: {params.path}",
        }

    def _run_env(self, params: EnvParams) -> dict[str, Any]:
        working_dir = self._directory(params.working_dir or params.path, "env")
        return collect_environment_info(
            working_dir,
            include_system=params.include_system,
            include_project=params.include_project,
        )
