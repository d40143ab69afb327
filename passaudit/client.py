"""HTTP client for the breach range API (``GET {endpoint}/{prefix}``)."""

import logging
import re
import threading
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from contextlib import contextmanager

import requests

from passaudit.errors import (
    BreachInvalidResponse,
    BreachRateLimited,
    BreachServiceUnavailable,
    BreachTimeout,
)
from passaudit.hashing import PREFIX_LENGTH

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api.pwnedpasswords.com/range"
DEFAULT_TIMEOUT = 10.0
DEFAULT_MAX_WORKERS = 16
USER_AGENT = "passaudit"

_CHUNK_SIZE = 8192
_PREFIX = re.compile(rf"[0-9A-Fa-f]{{{PREFIX_LENGTH}}}")


class BreachRangeClient:
    """Fetch candidate ``suffix:count`` lines for a 5-char hash prefix.

    The client never retries; every failure is raised as a classified
    :class:`~passaudit.errors.BreachServiceError`.

    Each request runs on a worker thread while the caller waits for the
    first of: the response, :meth:`close`, or the overall deadline of
    ``timeout`` seconds (which bounds the whole call, not each socket read).
    :meth:`close` wakes every waiting caller with
    :class:`~passaudit.errors.BreachServiceUnavailable` and closes the
    responses still being read.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        session: requests.Session | None = None,
        user_agent: str = USER_AGENT,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent,
            "Accept": "text/plain",
        })
        self._pool = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="breach-range",
        )
        # resolved once by close(); waiters select on it next to their request
        self._closed: Future = Future()
        self._lock = threading.Lock()
        self._inflight: set = set()

    @property
    def closed(self) -> bool:
        return self._closed.done()

    def url_for(self, prefix: str) -> str:
        if not _PREFIX.fullmatch(prefix):
            raise ValueError(
                f"range lookups take a {PREFIX_LENGTH}-character hex prefix only"
            )
        return f"{self.endpoint}/{prefix.upper()}"

    def fetch_range(self, prefix: str) -> list[str]:
        """Return the non-empty ``suffix:count`` lines for *prefix*."""
        url = self.url_for(prefix)
        deadline = time.monotonic() + self.timeout

        try:
            future = self._pool.submit(self._request, url, deadline)
        except RuntimeError as exc:
            # pool already shut down by close()
            raise BreachServiceUnavailable("client is closed") from exc

        done, _ = wait(
            [future, self._closed], timeout=self.timeout, return_when=FIRST_COMPLETED,
        )
        if future in done:
            return future.result()

        future.cancel()
        if self.closed:
            logger.error("Breach API request cancelled by shutdown")
            raise BreachServiceUnavailable("request cancelled")
        logger.error("Breach API request timed out after %ss", self.timeout)
        raise BreachTimeout(f"no complete response within {self.timeout}s")

    # ── Worker side ────────────────────────────────────────────────────

    def _request(self, url: str, deadline: float) -> list[str]:
        try:
            resp = self.session.get(url, timeout=self.timeout, stream=True)
        except requests.Timeout as exc:
            logger.error("Breach API request timed out after %ss", self.timeout)
            raise BreachTimeout(exc) from exc
        except requests.RequestException as exc:
            logger.error("Error calling breach API: %s", exc)
            raise BreachServiceUnavailable(exc) from exc

        with self._tracked(resp):
            status = resp.status_code
            if status != 200:
                logger.error("Breach API returned non-OK status: %d", status)
                cause = f"status code: {status}"
                if status == 429:
                    raise BreachRateLimited(cause)
                if status >= 500:
                    raise BreachServiceUnavailable(cause)
                raise BreachInvalidResponse(cause)

            content_type = resp.headers.get("Content-Type", "")
            if content_type and not content_type.lower().startswith("text/plain"):
                logger.error("Breach API returned unexpected content type: %s", content_type)
                raise BreachInvalidResponse(f"content type: {content_type}")

            body = self._read_body(resp, deadline)

        return self._parse_lines(body)

    @contextmanager
    def _tracked(self, resp):
        with self._lock:
            self._inflight.add(resp)
        try:
            if self.closed:
                raise BreachServiceUnavailable("request cancelled")
            yield resp
        finally:
            with self._lock:
                self._inflight.discard(resp)
            resp.close()

    def _read_body(self, resp, deadline: float) -> str:
        chunks = []
        try:
            for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
                if self.closed:
                    raise BreachServiceUnavailable("request cancelled")
                if time.monotonic() > deadline:
                    raise BreachTimeout(f"no complete response within {self.timeout}s")
                chunks.append(chunk)
        except requests.Timeout as exc:
            raise BreachTimeout(exc) from exc
        except requests.RequestException as exc:
            raise BreachServiceUnavailable(exc) from exc

        try:
            return b"".join(chunks).decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.error("Breach API returned a body that is not UTF-8")
            raise BreachInvalidResponse(exc) from exc

    @staticmethod
    def _parse_lines(body: str) -> list[str]:
        lines = [line.strip() for line in body.splitlines() if line.strip()]
        for line in lines:
            if line.count(":") != 1:
                logger.error("Breach API returned a malformed range line")
                raise BreachInvalidResponse(f"malformed line: {line[:48]!r}")
        return lines

    def close(self) -> None:
        """Cancel in-flight lookups and release the session."""
        with self._lock:
            if not self._closed.done():
                self._closed.set_result(None)
            responses = list(self._inflight)
        for resp in responses:
            resp.close()
        self._pool.shutdown(wait=False, cancel_futures=True)
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
