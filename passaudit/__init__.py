"""passaudit -- password strength scoring and k-anonymous breach checking.

Two independent operations:

    evaluate(password)                 -> StrengthResult  (pure, never fails)
    BreachChecker().check_breach(pw)   -> BreachResult    (network, may raise
                                                           BreachServiceError)

:class:`PasswordAuditor` runs both side by side for consumers.
"""

from passaudit.auditor import AuditReport, PasswordAuditor, merge_breach_feedback
from passaudit.breach import BreachChecker, BreachResult
from passaudit.cache import BreachCache, CacheSweeper
from passaudit.client import BreachRangeClient
from passaudit.config import BreachConfig, ConfigError, Settings, load_settings
from passaudit.errors import (
    BreachErrorKind,
    BreachInvalidResponse,
    BreachRateLimited,
    BreachServiceError,
    BreachServiceUnavailable,
    BreachTimeout,
)
from passaudit.hashing import HashDigest, sha1_hex
from passaudit.patterns import PatternFindings, detect_patterns
from passaudit.requirements import RequirementSignals, extract_requirements
from passaudit.strength import Category, StrengthResult, evaluate

__all__ = [
    "AuditReport",
    "BreachCache",
    "BreachChecker",
    "BreachConfig",
    "BreachErrorKind",
    "BreachInvalidResponse",
    "BreachRangeClient",
    "BreachRateLimited",
    "BreachResult",
    "BreachServiceError",
    "BreachServiceUnavailable",
    "BreachTimeout",
    "CacheSweeper",
    "Category",
    "ConfigError",
    "HashDigest",
    "PasswordAuditor",
    "PatternFindings",
    "RequirementSignals",
    "Settings",
    "StrengthResult",
    "detect_patterns",
    "evaluate",
    "extract_requirements",
    "load_settings",
    "merge_breach_feedback",
    "sha1_hex",
]
