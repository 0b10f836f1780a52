import random
import time
from dataclasses import dataclass

from app.config.settings import Settings
from app.logging.logger import Log, LogLike
from app.records.models import Record
from app.store.base import BaseRecordStore
from app.store.exceptions import StoreError

_BACKOFF_STRATEGIES = frozenset({"fixed", "exponential"})


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt budget and wait schedule for fetching records."""

    max_attempts: int = 5
    delay_seconds: float = 2.0
    backoff: str = "fixed"
    jitter_seconds: float = 0.0
    max_delay_seconds: float = 30.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay_seconds < 0 or self.jitter_seconds < 0 or self.max_delay_seconds < 0:
            raise ValueError("delay, jitter and max delay seconds must not be negative")
        if self.backoff not in _BACKOFF_STRATEGIES:
            raise ValueError(
                f"Unknown backoff '{self.backoff}'. Choose from: {sorted(_BACKOFF_STRATEGIES)}"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.fetch_max_attempts,
            delay_seconds=settings.fetch_retry_delay_seconds,
            backoff=settings.fetch_backoff.lower(),
            jitter_seconds=settings.fetch_jitter_seconds,
            max_delay_seconds=settings.fetch_max_delay_seconds,
        )

    def delay_after(self, attempt: int) -> float:
        """Seconds to wait after the given 1-based attempt."""
        if self.backoff == "fixed":
            delay = self.delay_seconds
        else:
            delay = min(self.delay_seconds * 2 ** (attempt - 1), self.max_delay_seconds)
        if self.jitter_seconds > 0:
            delay += random.uniform(0, self.jitter_seconds)
        return delay


class ResilientFetcher:
    """Fetch the records of a container, retrying empty or failed attempts."""

    def __init__(
        self,
        store: BaseRecordStore,
        policy: RetryPolicy | None = None,
        log: LogLike = Log,
    ) -> None:
        self._store = store
        self._policy = policy or RetryPolicy()
        self._log = log

    def fetch_all(self, container_id: str) -> list[Record]:
        """Return the first non-empty record list, or [] once attempts are exhausted.

        Store errors on individual attempts are logged and retried; they never
        propagate to the caller.
        """
        max_attempts = self._policy.max_attempts
        for attempt in range(1, max_attempts + 1):
            records = self._attempt(container_id, attempt)
            if records:
                self._log.info(
                    f"Found {len(records)} records in sheet {container_id} "
                    f"on attempt {attempt}"
                )
                return records
            if attempt < max_attempts:
                delay = self._policy.delay_after(attempt)
                self._log.debug(f"Waiting {delay:.1f}s before fetch retry")
                time.sleep(delay)

        self._log.warning(
            f"No records found in sheet {container_id} after {max_attempts} attempts"
        )
        return []

    def _attempt(self, container_id: str, attempt: int) -> list[Record]:
        try:
            return self._store.fetch(container_id, include_messages=True)
        except StoreError as exc:
            self._log.warning(f"Fetch attempt {attempt} for sheet {container_id} failed: {exc}")
            return []
