"""Deterministic password strength scoring.

The score is built from four parts:

    length score   (0-25)  stepped by length thresholds
    variety score  (0-24)  +6 per character class present
    pattern penalty         -20 common, -10 sequential, -15 repeated
    entropy score  (0-50)  log2 of the estimated charset, normalised

and clamped into 0-100.  :func:`evaluate` is pure and total: every string,
including the empty one, yields a valid :class:`StrengthResult`.
"""

import enum
import math
from dataclasses import asdict, dataclass, replace

from passaudit.patterns import PatternFindings, detect_patterns
from passaudit.requirements import (
    DEFAULT_MAX_LENGTH,
    DEFAULT_MIN_LENGTH,
    RequirementSignals,
    char_classes,
    extract_requirements,
)


class Category(str, enum.Enum):
    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"
    VERY_STRONG = "very_strong"


@dataclass(frozen=True)
class StrengthResult:
    score: int
    category: Category
    requirements: RequirementSignals
    findings: PatternFindings
    warnings: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()
    entropy: float = 0.0

    def with_feedback(self, warnings=(), suggestions=()) -> "StrengthResult":
        """Return a copy with extra feedback appended."""
        return replace(
            self,
            warnings=self.warnings + tuple(warnings),
            suggestions=self.suggestions + tuple(suggestions),
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["category"] = self.category.value
        data["warnings"] = list(self.warnings)
        data["suggestions"] = list(self.suggestions)
        return data


# ── Feedback messages ──────────────────────────────────────────────────────

WARN_COMMON = "Password contains common patterns"
WARN_SEQUENTIAL = "Password contains sequential characters"
WARN_REPEATED = "Password contains repeated patterns"

SUGGEST_COMMON = "Use a more unique combination of characters"
SUGGEST_SEQUENTIAL = "Avoid keyboard patterns and sequential characters"
SUGGEST_REPEATED = "Avoid repeating character sequences"
SUGGEST_UPPER = "Add uppercase letters"
SUGGEST_LOWER = "Add lowercase letters"
SUGGEST_NUMBERS = "Add numbers"
SUGGEST_SPECIAL = "Add special characters"
SUGGEST_LENGTH = "Use a longer password (12+ characters)"
SUGGEST_PASSPHRASE = "Consider using a passphrase with multiple words"
SUGGEST_MIX = "Mix different character types more thoroughly"

# (threshold, points), checked top-down
_LENGTH_STEPS = ((16, 25), (12, 20), (8, 15), (6, 10), (4, 5))

# (lower bound, category), checked top-down
_CATEGORY_BOUNDS = (
    (80, Category.VERY_STRONG),
    (60, Category.STRONG),
    (40, Category.MEDIUM),
)


# ── Score components ───────────────────────────────────────────────────────


def length_score(password: str) -> int:
    length = len(password)
    for threshold, points in _LENGTH_STEPS:
        if length >= threshold:
            return points
    return 0


def variety_score(requirements: RequirementSignals) -> int:
    classes = (
        requirements.uppercase,
        requirements.lowercase,
        requirements.numbers,
        requirements.special_chars,
    )
    return 6 * sum(classes)


def pattern_penalty(findings: PatternFindings) -> int:
    penalty = 0
    if findings.common_substring:
        penalty += 20
    if findings.sequential_run:
        penalty += 10
    if findings.repeated_block:
        penalty += 15
    return penalty


def charset_size(password: str) -> int:
    upper, lower, digit, symbol = char_classes(password)
    return (
        (26 if upper else 0)
        + (26 if lower else 0)
        + (10 if digit else 0)
        + (32 if symbol else 0)
    )


def entropy_bits(password: str) -> float:
    """Estimated entropy in bits: ``length * log2(charset size)``."""
    pool = charset_size(password)
    if not password or not pool:
        return 0.0
    return len(password) * math.log2(pool)


def entropy_score(password: str) -> int:
    # ceiling of 10 bits per character maps to the full 50 points
    ceiling = 10.0 * len(password)
    if not ceiling:
        return 0
    return min(50, int(entropy_bits(password) / ceiling * 50))


def category_for(score: int) -> Category:
    for bound, category in _CATEGORY_BOUNDS:
        if score >= bound:
            return category
    return Category.WEAK


def build_feedback(
    password: str,
    score: int,
    requirements: RequirementSignals,
    findings: PatternFindings,
) -> tuple[list[str], list[str]]:
    """Return ``(warnings, suggestions)`` in their fixed order."""
    warnings: list[str] = []
    suggestions: list[str] = []

    if findings.common_substring:
        warnings.append(WARN_COMMON)
        suggestions.append(SUGGEST_COMMON)
    if findings.sequential_run:
        warnings.append(WARN_SEQUENTIAL)
        suggestions.append(SUGGEST_SEQUENTIAL)
    if findings.repeated_block:
        warnings.append(WARN_REPEATED)
        suggestions.append(SUGGEST_REPEATED)

    if not requirements.uppercase:
        suggestions.append(SUGGEST_UPPER)
    if not requirements.lowercase:
        suggestions.append(SUGGEST_LOWER)
    if not requirements.numbers:
        suggestions.append(SUGGEST_NUMBERS)
    if not requirements.special_chars:
        suggestions.append(SUGGEST_SPECIAL)

    if len(password) < 12:
        suggestions.append(SUGGEST_LENGTH)

    if score < 40:
        suggestions.append(SUGGEST_PASSPHRASE)
    if score < 60:
        suggestions.append(SUGGEST_MIX)

    return warnings, suggestions


# ── Public entry point ─────────────────────────────────────────────────────


def evaluate(
    password: str,
    min_length: int = DEFAULT_MIN_LENGTH,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> StrengthResult:
    """Score *password* and return a full :class:`StrengthResult`.

    *max_length* bounds the repeated-block scan only; longer inputs are
    still scored in full.
    """
    requirements = extract_requirements(password, min_length)
    findings = detect_patterns(password, scan_limit=max_length)

    total = (
        length_score(password)
        + variety_score(requirements)
        - pattern_penalty(findings)
        + entropy_score(password)
    )
    score = max(0, min(100, total))

    warnings, suggestions = build_feedback(password, score, requirements, findings)

    return StrengthResult(
        score=score,
        category=category_for(score),
        requirements=requirements,
        findings=findings,
        warnings=tuple(warnings),
        suggestions=tuple(suggestions),
        entropy=round(entropy_bits(password), 1),
    )
