"""Validation and normalisation of user search patterns.

Every find pattern passes through :func:`sanitize_pattern` before it reaches
the glob engine. The checks are engine independent: they bound the number
of alternatives, their length, and their wildcard structure so that no
single request can make expansion blow up.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from wayfinder.config import DEFAULT_FIND_PATTERN, DEFAULT_SEARCH_LIMITS, SearchLimits
from wayfinder.exceptions import PatternRejectedError

LOGGER = logging.getLogger(__name__)

BARE_WILDCARD_PATTERNS = frozenset({"*", "**", "?", "??"})
SUGGESTED_SEGMENT_COUNT = 3
PATTERN_TIP = "Use **/*word* for simple contains searches, or **/*.ext for file extensions"


@dataclass(frozen=True)
class SanitizedPattern:
    """Bounded list of glob sub-patterns safe to hand to the glob engine."""

    original: str
    patterns: tuple[str, ...]

    def wildcard_count(self) -> int:
        return sum(pattern.count("*") for pattern in self.patterns)

    def is_simple(self, limits: SearchLimits = DEFAULT_SEARCH_LIMITS) -> bool:
        """Return True for a single sub-pattern with few wildcards."""
        return (
            len(self.patterns) == 1
            and self.patterns[0].count("*") <= limits.simple_pattern_wildcards
        )


def literal_segments(pattern: str) -> list[str]:
    """Return the non-empty ``*``-delimited pieces of ``pattern``."""
    return [segment for segment in pattern.split("*") if segment]


def _suggestion_terms(pattern: str) -> list[str]:
    terms = [segment.strip("/") for segment in literal_segments(pattern)]
    return [term for term in terms if term][:SUGGESTED_SEGMENT_COUNT]


def brace_suggestion(pattern: str) -> str:
    """Build a simpler recursive pattern from the literal pieces of ``pattern``."""
    terms = _suggestion_terms(pattern)
    if not terms:
        return DEFAULT_FIND_PATTERN
    if len(terms) == 1:
        return f"**/*{terms[0]}*"
    return "**/*{" + ",".join(terms) + "}*"


def rewrite_pattern(pattern: str) -> str:
    """Rewrite a validated sub-pattern into its recursive, bounded form."""
    if pattern in BARE_WILDCARD_PATTERNS:
        return DEFAULT_FIND_PATTERN
    if "*" not in pattern or pattern.startswith("**"):
        return pattern

    segments = literal_segments(pattern)
    if not segments:
        return DEFAULT_FIND_PATTERN
    if len(segments) == 1:
        return f"**/*{segments[0]}*"
    if len(segments) <= 3:
        return f"**/{pattern}"
    if len(segments) <= 5:
        return "**/*{" + ",".join(segments) + "}*"
    # Too many pieces to combine safely: keep only the first one.
    return rewrite_pattern(f"*{segments[0]}*")


def _validate_alternative(pattern: str, limits: SearchLimits) -> None:
    if len(pattern) > limits.max_pattern_length:
        raise PatternRejectedError(
            "Individual pattern too long",
            context={"providedPattern": pattern, "patternLength": len(pattern)},
            suggestion=(
                f'Pattern "{pattern[:50]}..." is too long ({len(pattern)} characters). '
                "Please use shorter, simpler patterns."
            ),
        )

    wildcard_count = pattern.count("*")
    question_mark_count = pattern.count("?")
    complexity_score = wildcard_count * 2 + question_mark_count
    if complexity_score > limits.max_complexity_score:
        simplified = brace_suggestion(pattern)
        raise PatternRejectedError(
            "Pattern too complex - might cause overflow",
            context={
                "providedPattern": pattern,
                "complexityScore": complexity_score,
                "simplifiedSuggestion": simplified,
                "tip": PATTERN_TIP,
            },
            suggestion=(
                f'Pattern "{pattern}" is too complex ({wildcard_count} wildcards, '
                f'complexity score: {complexity_score}). Try "{simplified}" '
                "or break into separate searches."
            ),
        )

    segment_count = len(pattern.split("*"))
    if "*" in pattern and segment_count > limits.max_wildcard_segments:
        simplified = brace_suggestion(pattern)
        raise PatternRejectedError(
            "Pattern has too many wildcard segments",
            context={
                "providedPattern": pattern,
                "segmentCount": segment_count,
                "simplifiedSuggestion": simplified,
                "alternativeSuggestions": [
                    f"**/*{term}*" for term in _suggestion_terms(pattern)
                ],
            },
            suggestion=(
                f'Pattern "{pattern}" has too many wildcard segments ({segment_count}). '
                f'Try "{simplified}" or use separate searches for each term.'
            ),
        )


def sanitize_pattern(
    raw: str | None,
    limits: SearchLimits = DEFAULT_SEARCH_LIMITS,
) -> SanitizedPattern:
    """Validate ``raw`` and return its safe sub-patterns.

    Raises:
        PatternRejectedError: when the pattern has too many alternatives, an
            alternative is too long, too complex, or has too many wildcard
            segments. The error carries a concrete simpler alternative.
    """
    original = raw or ""
    text = original.strip()
    if not text or text in BARE_WILDCARD_PATTERNS:
        return SanitizedPattern(original=original, patterns=(DEFAULT_FIND_PATTERN,))

    alternatives = [part.strip() for part in text.split("|")]
    if len(alternatives) > limits.max_alternatives:
        raise PatternRejectedError(
            "Pattern contains too many alternatives",
            context={"providedPattern": original, "patternCount": len(alternatives)},
            suggestion=(
                f"Too many patterns ({len(alternatives)}). Please limit to "
                f"{limits.max_alternatives} or fewer patterns, or use broader glob "
                'patterns like "**/*{tic,toe,tac}*".'
            ),
        )

    alternatives = [part for part in alternatives if part]
    if not alternatives:
        return SanitizedPattern(original=original, patterns=(DEFAULT_FIND_PATTERN,))

    for alternative in alternatives:
        _validate_alternative(alternative, limits)

    rewritten: list[str] = []
    for alternative in alternatives:
        candidate = rewrite_pattern(alternative)
        if candidate not in rewritten:
            rewritten.append(candidate)
    LOGGER.debug("Sanitized pattern %r -> %s", original, rewritten)
    return SanitizedPattern(original=original, patterns=tuple(rewritten))


__all__ = [
    "SanitizedPattern",
    "brace_suggestion",
    "literal_segments",
    "rewrite_pattern",
    "sanitize_pattern",
]
