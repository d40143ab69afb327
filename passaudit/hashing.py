"""SHA-1 digest and its k-anonymity split.

Only :attr:`HashDigest.prefix` (5 hex chars) is ever sent over the network.
The suffix is compared locally and the password itself goes no further than
the hasher.
"""

import hashlib
import re
from dataclasses import dataclass
from typing import Callable

DIGEST_LENGTH = 40
PREFIX_LENGTH = 5

Hasher = Callable[[str], str]

_HEX40 = re.compile(r"[0-9A-F]{40}")


def sha1_hex(password: str) -> str:
    """Return the uppercase SHA-1 hex digest of *password* (UTF-8).

    Lone surrogates (from undecodable input bytes) are encoded as-is so
    every str has a digest.
    """
    return hashlib.sha1(password.encode("utf-8", "surrogatepass")).hexdigest().upper()


@dataclass(frozen=True, repr=False)
class HashDigest:
    value: str

    def __post_init__(self):
        if not _HEX40.fullmatch(self.value):
            raise ValueError(
                f"digest must be {DIGEST_LENGTH} uppercase hex characters, "
                f"got {len(self.value)} characters"
            )

    @classmethod
    def from_hex(cls, hex_digest: str) -> "HashDigest":
        return cls(hex_digest.strip().upper())

    @property
    def prefix(self) -> str:
        return self.value[:PREFIX_LENGTH]

    @property
    def suffix(self) -> str:
        return self.value[PREFIX_LENGTH:]

    def __repr__(self) -> str:
        # keep the private suffix out of logs and tracebacks
        return f"HashDigest(prefix={self.prefix!r})"


def digest_password(password: str, hasher: Hasher = sha1_hex) -> HashDigest:
    return HashDigest.from_hex(hasher(password))
