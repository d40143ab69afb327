"""Thread-safe memo of breach results, flushed whole on a fixed interval.

The cache is keyed by the full digest.  :meth:`BreachCache.sweep` clears
every entry at once, so an entry lives anywhere between zero and one full
sweep interval depending on when it was inserted.  Sweeps are driven by a
:class:`CacheSweeper` that callers start explicitly, or by calling
:meth:`BreachCache.sweep` directly.
"""

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from typing import Callable

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Read-preferring shared/exclusive lock.

    Any number of readers may hold the lock together; a writer waits until
    no reader holds it and blocks new readers while it writes.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0

    def acquire_read(self) -> None:
        with self._cond:
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if not self._readers:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        self._cond.acquire()
        while self._readers:
            self._cond.wait()

    def release_write(self) -> None:
        self._cond.release()

    @contextmanager
    def read_locked(self):
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self):
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


@dataclass(frozen=True)
class CacheEntry:
    digest: str
    found: bool
    count: int
    last_checked: date | None
    inserted_at: float


class BreachCache:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = ReadWriteLock()
        self._entries: dict[str, CacheEntry] = {}

    def get(self, digest: str) -> CacheEntry | None:
        with self._lock.read_locked():
            return self._entries.get(digest)

    def put(self, digest: str, entry: CacheEntry) -> None:
        with self._lock.write_locked():
            self._entries[digest] = entry

    def store(
        self, digest: str, found: bool, count: int, last_checked: date | None = None,
    ) -> CacheEntry:
        """Build an entry stamped with the cache clock and :meth:`put` it."""
        entry = CacheEntry(
            digest=digest,
            found=found,
            count=count,
            last_checked=last_checked,
            inserted_at=self._clock(),
        )
        self.put(digest, entry)
        return entry

    def sweep(self) -> int:
        """Evict every entry and return how many were dropped."""
        with self._lock.write_locked():
            evicted = len(self._entries)
            self._entries = {}
        logger.debug("Cleaned breach cache (%d entries evicted)", evicted)
        return evicted

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._entries)

    def __contains__(self, digest: str) -> bool:
        with self._lock.read_locked():
            return digest in self._entries


class CacheSweeper:
    """Run :meth:`BreachCache.sweep` every *interval* seconds on a daemon
    thread until :meth:`stop` is called."""

    def __init__(self, cache: BreachCache, interval: float):
        if interval <= 0:
            raise ValueError("sweep interval must be positive")
        self.cache = cache
        self.interval = interval
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stopped.clear()
        self._thread = threading.Thread(
            target=self._run, name="breach-cache-sweeper", daemon=True,
        )
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        self._stopped.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            self.cache.sweep()
