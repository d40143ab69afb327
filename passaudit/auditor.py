"""Front door for consumers: strength and breach checks side by side."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from passaudit.breach import BreachChecker, BreachResult
from passaudit.config import Settings
from passaudit.errors import BreachServiceError
from passaudit.strength import StrengthResult, evaluate

logger = logging.getLogger(__name__)

WARN_BREACHED = "Password has appeared in data breaches"
SUGGEST_BREACHED = "Choose a password that hasn't been compromised"


@dataclass(frozen=True)
class AuditReport:
    strength: StrengthResult
    breach: BreachResult | None = None
    breach_error: str | None = None

    @property
    def breach_known(self) -> bool:
        return self.breach is not None

    def to_dict(self) -> dict:
        data = self.strength.to_dict()
        data["breach_data"] = self.breach.to_dict() if self.breach else None
        if self.breach_error:
            data["breach_error"] = self.breach_error
        return data


def merge_breach_feedback(
    strength: StrengthResult, breach: BreachResult | None,
) -> StrengthResult:
    """Add the breach warning and suggestion when the password was found."""
    if breach is None or not breach.found:
        return strength
    return strength.with_feedback([WARN_BREACHED], [SUGGEST_BREACHED])


class PasswordAuditor:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        checker: BreachChecker | None = None,
    ):
        self.settings = settings or Settings()
        self.checker = checker or BreachChecker(self.settings.breach)
        self._pool = ThreadPoolExecutor(
            max_workers=self.settings.workers, thread_name_prefix="passaudit",
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordAuditor":
        """Build an auditor with its cache sweep already running."""
        auditor = cls(settings)
        auditor.checker.start()
        return auditor

    def evaluate(self, password: str) -> StrengthResult:
        return evaluate(password, self.settings.min_length, self.settings.max_length)

    def check_breach(self, password: str) -> BreachResult:
        return self.checker.check_breach(password)

    def audit(self, password: str) -> AuditReport:
        """Run strength and breach checks concurrently.

        A breach service failure is reported on the result rather than
        raised, so the strength report is always available.
        """
        breach_future = self._pool.submit(self.checker.check_breach, password)
        strength = self.evaluate(password)

        try:
            breach = breach_future.result()
        except BreachServiceError as exc:
            logger.warning("Could not determine breach status: %s", exc)
            return AuditReport(strength=strength, breach_error=str(exc))

        return AuditReport(
            strength=merge_breach_feedback(strength, breach),
            breach=breach,
        )

    def close(self) -> None:
        self._pool.shutdown(wait=False, cancel_futures=True)
        self.checker.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
