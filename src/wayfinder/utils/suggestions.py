"""'Did you mean' hints for mistyped action names."""

from __future__ import annotations

from typing import Sequence

from wayfinder.config import SIMILARITY_INPUT_LIMIT

# Common names callers reach for instead of the supported actions.
ACTION_SYNONYMS: dict[str, str] = {
    "grep": "find",
    "search": "find",
    "locate": "find",
    "ls": "list",
    "dir": "list",
    "pwd": "current",
    "cwd": "current",
    "stat": "info",
    "details": "info",
    "metadata": "info",
    "structure": "tree",
    "recursive": "tree",
    "environment": "env",
    "config": "env",
    "statistics": "stats",
    "summary": "stats",
}


def levenshtein_distance(first: str, second: str) -> int:
    """Return the edit distance between two strings."""
    if not first:
        return len(second)
    if not second:
        return len(first)
    previous = list(range(len(second) + 1))
    for row, left in enumerate(first, start=1):
        current = [row]
        for column, right in enumerate(second, start=1):
            cost = 0 if left == right else 1
            current.append(min(current[-1] + 1, previous[column] + 1, previous[column - 1] + cost))
        previous = current
    return previous[-1]


def similarity(first: str, second: str) -> float:
    """Return ``1 - distance / longer_length`` in the range ``[0, 1]``."""
    longer = max(len(first), len(second))
    if longer == 0:
        return 1.0
    return (longer - levenshtein_distance(first, second)) / longer


def closest_action(invalid: str, valid_actions: Sequence[str]) -> str | None:
    """Return the synonym or most similar valid action for ``invalid``."""
    if not valid_actions:
        return None
    lowered = invalid.strip().lower()
    mapped = ACTION_SYNONYMS.get(lowered)
    if mapped in valid_actions:
        return mapped
    if len(lowered) > SIMILARITY_INPUT_LIMIT:
        return valid_actions[0]

    best_match = valid_actions[0]
    best_score = 0.0
    for action in valid_actions:
        score = similarity(lowered, action)
        if score > best_score:
            best_match, best_score = action, score
    return best_match


def suggest_action(invalid: str, valid_actions: Sequence[str]) -> str:
    """Build the hint attached to an invalid-action error."""
    valid_list = ", ".join(valid_actions)
    match = closest_action(invalid, valid_actions)
    shown = invalid if len(invalid) <= SIMILARITY_INPUT_LIMIT else f"{invalid[:SIMILARITY_INPUT_LIMIT]}..."
    if match is None:
        return f'Invalid action "{shown}". Valid actions are: {valid_list}'
    return f'Invalid action "{shown}". Did you mean "{match}"? Valid actions are: {valid_list}'


__all__ = [
    "ACTION_SYNONYMS",
    "closest_action",
    "levenshtein_distance",
    "similarity",
    "suggest_action",
]
