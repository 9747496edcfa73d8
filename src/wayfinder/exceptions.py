"""Wayfinder exception hierarchy with structured context support."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, MutableMapping


@dataclass(slots=True)
class WayfinderError(Exception):
    """Base class for all Wayfinder exceptions with optional context metadata."""

    message: str
    context: MutableMapping[str, object] = field(default_factory=dict)
    suggestion: str | None = None

    def __post_init__(self) -> None:
        """Normalize context mapping."""
        if not isinstance(self.context, Mapping):
            self.context = {"detail": str(self.context)}
        else:
            self.context = dict(self.context)
        Exception.__init__(self, self.__str__())

    def __str__(self) -> str:
        """Include context metadata in the string representation."""
        if self.context:
            context_parts = ", ".join(f"{key}={value}" for key, value in self.context.items())
            return f"{self.message} ({context_parts})"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Return the structured error object handed back to tool callers."""
        payload: dict[str, Any] = {"error": True, "message": self.message}
        if self.suggestion:
            payload["suggestion"] = self.suggestion
        payload.update(self.context)
        return payload


class UsageError(WayfinderError):
    """Raised when caller parameters are invalid or too large to run safely."""


class PatternRejectedError(UsageError):
    """Raised when a search pattern is rejected before glob expansion."""


class ResourceLimitError(WayfinderError):
    """Raised inside a walk when a budget ceiling is reached.

    Operations convert it into a warning on an otherwise successful result.
    """


class SearchTimeoutError(WayfinderError):
    """Raised when a find expansion exceeds its wall-clock budget."""


class PathAccessError(WayfinderError):
    """Raised when the operation root is missing, unreadable, or the wrong node type."""


__all__ = [
    "WayfinderError",
    "UsageError",
    "PatternRejectedError",
    "ResourceLimitError",
    "SearchTimeoutError",
    "PathAccessError",
]
