"""Character-class requirement signals for a password."""

import unicodedata
from dataclasses import asdict, dataclass

DEFAULT_MIN_LENGTH = 8
DEFAULT_MAX_LENGTH = 128


@dataclass(frozen=True)
class RequirementSignals:
    length: bool
    uppercase: bool
    lowercase: bool
    numbers: bool
    special_chars: bool

    def to_dict(self) -> dict:
        return asdict(self)


def _is_symbol(ch: str) -> bool:
    # Unicode punctuation (P*) or symbol (S*) categories
    return unicodedata.category(ch)[0] in "PS"


def char_classes(password: str) -> tuple[bool, bool, bool, bool]:
    """Return ``(upper, lower, digit, symbol)`` presence flags.

    Each character counts towards the first matching class only, in that
    order.  Characters in none of the classes (spaces, caseless letters)
    are ignored.
    """
    upper = lower = digit = symbol = False
    for ch in password:
        if ch.isupper():
            upper = True
        elif ch.islower():
            lower = True
        elif ch.isdecimal():
            digit = True
        elif _is_symbol(ch):
            symbol = True
    return upper, lower, digit, symbol


def extract_requirements(
    password: str, min_length: int = DEFAULT_MIN_LENGTH,
) -> RequirementSignals:
    """Derive the five requirement signals for *password*.

    Total over all strings, including the empty one.
    """
    upper, lower, digit, symbol = char_classes(password)
    return RequirementSignals(
        length=len(password) >= min_length,
        uppercase=upper,
        lowercase=lower,
        numbers=digit,
        special_chars=symbol,
    )
