import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from s3batch.errors import cleanup, is_acceptable, is_retryable

MAX_RETRIES = 10
BACKOFF_BASE_S = 0.75

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryDecision:
    retry: bool
    code: str = ""
    delay_s: float = 0.0
    message: str = ""


@dataclass(frozen=True)
class RetryPolicy:
    """Decides whether a failed remote call should be reissued.

    Timing belongs to the caller: decide() only returns the delay to wait.
    """

    max_retries: int = MAX_RETRIES
    backoff_base_s: float = BACKOFF_BASE_S

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "RetryPolicy":
        retries = cfg.get("retries")
        backoff = cfg.get("backoff_base_s")
        return cls(
            max_retries=MAX_RETRIES if retries is None else int(retries),
            backoff_base_s=BACKOFF_BASE_S if backoff is None else float(backoff),
        )

    def delay(self, attempt: int) -> float:
        return self.backoff_base_s * (2 ** (max(attempt, 1) - 1))

    def decide(self, err: Optional[BaseException], attempt: int, label: str = "") -> RetryDecision:
        """attempt is 1 for the first failure of a call."""
        if err is None or is_acceptable(err) is not None:
            return RetryDecision(retry=False)
        msg = cleanup(err)
        code, retryable = is_retryable(err)
        if not retryable:
            return RetryDecision(retry=False, message=msg)
        if attempt > self.max_retries:
            logger.warning("%s failed after %d retries (%s), giving up: %s", label or "call", self.max_retries, code, msg)
            return RetryDecision(retry=False, code=code, message=msg)
        delay = self.delay(attempt)
        logger.info("Retrying %s (%d/%d) after %s in %.2fs", label or "call", attempt, self.max_retries, code, delay)
        return RetryDecision(retry=True, code=code, delay_s=delay, message=msg)
