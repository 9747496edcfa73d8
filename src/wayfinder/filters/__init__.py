"""Admission filters applied to every directory entry."""

from .entry_filters import admit_entry, is_always_ignored, is_hidden, is_important_hidden_file
from .ignore_rules import IgnoreRuleSet, build_ignore_rule_set, rule_set_from_lines

__all__ = [
    "IgnoreRuleSet",
    "admit_entry",
    "build_ignore_rule_set",
    "is_always_ignored",
    "is_hidden",
    "is_important_hidden_file",
    "rule_set_from_lines",
]
