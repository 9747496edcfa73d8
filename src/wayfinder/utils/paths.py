"""Path resolution helpers shared by the exploration tools."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from wayfinder.exceptions import PathAccessError

LOGGER = logging.getLogger(__name__)


def resolve_directory(
    path: str | os.PathLike[str] | None,
    *,
    operation: str,
    base_dir: Path | None = None,
) -> Path:
    """Resolve ``path`` against ``base_dir`` (or the cwd) and require a directory.

    Raises:
        PathAccessError: when the path does not exist or is not a directory.
    """
    candidate = Path(path).expanduser() if path else Path(".")
    if not candidate.is_absolute():
        candidate = (base_dir or Path.cwd()) / candidate
    resolved = candidate.resolve(strict=False)
    LOGGER.debug("Resolved %s -> %s for %s", path, resolved, operation)
    if not resolved.exists():
        raise PathAccessError(
            f"Path does not exist: {path or '.'}",
            context={"operation": operation, "path": str(resolved)},
            suggestion="Check the path and try again with an existing directory.",
        )
    if not resolved.is_dir():
        raise PathAccessError(
            f"Path is not a directory: {path}",
            context={"operation": operation, "path": str(resolved)},
            suggestion="Pass the parent directory, or use the 'info' action for single files.",
        )
    return resolved


__all__ = ["resolve_directory"]
