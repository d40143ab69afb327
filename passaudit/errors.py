"""Breach service error taxonomy.

Every failure of the breach lookup surfaces as a :class:`BreachServiceError`
subclass.  Callers branch on ``kind`` (or the subclass) to decide whether to
retry; the engine itself never retries.
"""

import enum


class BreachErrorKind(str, enum.Enum):
    TIMEOUT = "timeout"
    RATE_LIMITED = "rate_limited"
    SERVICE_UNAVAILABLE = "service_unavailable"
    INVALID_RESPONSE = "invalid_response"


class BreachServiceError(Exception):
    """Base class for classified breach lookup failures."""

    kind: BreachErrorKind
    message = "breach service error"

    def __init__(self, cause: object = None):
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class BreachTimeout(BreachServiceError):
    kind = BreachErrorKind.TIMEOUT
    message = "breach API request timed out"


class BreachRateLimited(BreachServiceError):
    kind = BreachErrorKind.RATE_LIMITED
    message = "breach API rate limit exceeded"


class BreachServiceUnavailable(BreachServiceError):
    kind = BreachErrorKind.SERVICE_UNAVAILABLE
    message = "breach API is unavailable"


class BreachInvalidResponse(BreachServiceError):
    kind = BreachErrorKind.INVALID_RESPONSE
    message = "breach API returned invalid response"
