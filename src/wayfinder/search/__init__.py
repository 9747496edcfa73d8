"""Pattern sanitisation, glob expansion and the find operation."""

from .finder import find
from .pattern_sanitizer import SanitizedPattern, sanitize_pattern

__all__ = ["SanitizedPattern", "find", "sanitize_pattern"]
