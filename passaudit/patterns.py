"""Structural weakness detection: known substrings, runs and repeats."""

import re
from dataclasses import asdict, dataclass

from passaudit.requirements import DEFAULT_MAX_LENGTH

# ── Fixed token lists ──────────────────────────────────────────────────────

COMMON_SUBSTRINGS = (
    "qwerty",
    "asdf",
    "zxcv",
    "123456",
    "abcdef",
    "password",
    "admin",
    "welcome",
    "login",
    # numeric runs
    "111111",
    "000000",
    "654321",
)


def _forward_runs(alphabet: str, size: int) -> list[str]:
    return [alphabet[i : i + size] for i in range(len(alphabet) - size + 1)]


SEQUENTIAL_RUNS = (
    *_forward_runs("abcdefghijklmnopqrstuvwxyz", 6),
    *_forward_runs("1234567890", 6),
    "qwerty",
    "asdfgh",
    "zxcvbn",
)

_TRIPLE_CHAR = re.compile(r"(.)\1\1", re.DOTALL)


@dataclass(frozen=True)
class PatternFindings:
    common_substring: bool
    sequential_run: bool
    repeated_block: bool

    def __bool__(self) -> bool:
        return self.common_substring or self.sequential_run or self.repeated_block

    def to_dict(self) -> dict:
        return asdict(self)


# ── Detectors ──────────────────────────────────────────────────────────────


def has_common_substring(password: str) -> bool:
    lower = password.lower()
    return any(token in lower for token in COMMON_SUBSTRINGS)


def has_sequential_run(password: str) -> bool:
    """True if *password* contains an ascending alphabet, digit or
    keyboard-row run.  Descending runs are not flagged."""
    lower = password.lower()
    return any(run in lower for run in SEQUENTIAL_RUNS)


def has_repeated_block(password: str, scan_limit: int = DEFAULT_MAX_LENGTH) -> bool:
    """True for an immediately repeated block (``abcabc``, ``1212``) or
    three identical characters in a row (``aaa``).

    Blocks are searched in the first *scan_limit* characters only; the
    triple-character check covers the whole string.
    """
    if _TRIPLE_CHAR.search(password):
        return True

    text = password[:scan_limit]
    n = len(text)
    for size in range(2, n // 2 + 1):
        # a block of this size repeats once `size` consecutive positions
        # match the character `size` places further on
        run = 0
        for i in range(n - size):
            if text[i] == text[i + size]:
                run += 1
                if run >= size:
                    return True
            else:
                run = 0
    return False


def detect_patterns(password: str, scan_limit: int = DEFAULT_MAX_LENGTH) -> PatternFindings:
    return PatternFindings(
        common_substring=has_common_substring(password),
        sequential_run=has_sequential_run(password),
        repeated_block=has_repeated_block(password, scan_limit),
    )
