"""Breach checking: hash, consult the cache, then the range API.

Only the 5-character digest prefix ever leaves the process.  Successful
lookups are cached by full digest; failures propagate as
:class:`~passaudit.errors.BreachServiceError` and are never cached.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable

from passaudit.cache import BreachCache, CacheEntry, CacheSweeper
from passaudit.client import BreachRangeClient
from passaudit.config import BreachConfig
from passaudit.hashing import HashDigest, Hasher, digest_password, sha1_hex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BreachResult:
    found: bool = False
    breach_count: int = 0
    last_checked: date | None = None

    @classmethod
    def from_entry(cls, entry: CacheEntry) -> "BreachResult":
        return cls(
            found=entry.found,
            breach_count=entry.count,
            last_checked=entry.last_checked,
        )

    def to_dict(self) -> dict:
        data = {"found": self.found, "breach_count": self.breach_count}
        if self.last_checked is not None:
            data["last_checked"] = self.last_checked.isoformat()
        return data


def match_suffix(lines: list[str], suffix: str) -> tuple[bool, int]:
    """Scan range *lines* for *suffix*; return ``(found, count)``.

    Suffixes compare case-insensitively.  A matching line whose count does
    not parse still counts as found, with a count of 0.
    """
    suffix = suffix.upper()
    for line in lines:
        candidate, sep, count = line.partition(":")
        if not sep or candidate.strip().upper() != suffix:
            continue
        try:
            return True, max(0, int(count.strip()))
        except ValueError:
            logger.warning("Error parsing breach count for matching suffix")
            return True, 0
    return False, 0


class BreachChecker:
    """Check passwords against the breach corpus with k-anonymity.

    *client*, *hasher*, *cache* and *today* are injectable so tests can run
    against stubs and fixed digests.  The periodic cache sweep only runs
    after :meth:`start`; :meth:`close` stops it and closes the client.
    """

    def __init__(
        self,
        config: BreachConfig | None = None,
        *,
        client: BreachRangeClient | None = None,
        hasher: Hasher = sha1_hex,
        cache: BreachCache | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.config = config or BreachConfig()
        self.client = client or BreachRangeClient(
            self.config.endpoint, self.config.timeout,
        )
        self.hasher = hasher
        self.cache = cache if cache is not None else BreachCache()
        self.sweeper = CacheSweeper(self.cache, self.config.cache_duration)
        self._today = today

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def check_breach(self, password: str) -> BreachResult:
        if not self.enabled:
            logger.info("Breach detection is disabled")
            return BreachResult(found=False)

        digest = digest_password(password, self.hasher)
        return self.check_digest(digest)

    def check_digest(self, digest: HashDigest) -> BreachResult:
        cached = self.cache.get(digest.value)
        if cached is not None:
            logger.debug("Breach result found in cache")
            return BreachResult.from_entry(cached)

        logger.debug("Checking breach status for hash prefix: %s", digest.prefix)
        lines = self.client.fetch_range(digest.prefix)

        found, count = match_suffix(lines, digest.suffix)
        entry = self.cache.store(
            digest.value,
            found=found,
            count=count,
            last_checked=self._today() if found else None,
        )
        return BreachResult.from_entry(entry)

    def start(self) -> None:
        """Start the periodic cache sweep (no-op when disabled)."""
        if self.enabled:
            self.sweeper.start()

    def close(self) -> None:
        self.sweeper.stop()
        self.client.close()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *exc_info):
        self.close()
