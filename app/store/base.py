from abc import ABC, abstractmethod
from collections.abc import Sequence

from app.records.models import Record, RecordUpdate


class BaseRecordStore(ABC):
    """Contract for all record store adapters."""

    @abstractmethod
    def fetch(self, container_id: str, *, include_messages: bool = True) -> list[Record]:
        """Return the current records of a container in stored order.

        Args:
            container_id: Sheet identifier.
            include_messages: Ask the store to include validation messages
                              in the wrapped field values.

        Raises:
            FetchAttemptError: on transport failure or a malformed response.
        """

    @abstractmethod
    def batch_update(self, container_id: str, updates: Sequence[RecordUpdate]) -> None:
        """Apply field updates to existing records in one call.

        Raises:
            BatchUpdateError: when the store rejects the update.
        """

    def close(self) -> None:
        """Release network resources held by the adapter."""


class BaseJobReporter(ABC):
    """Contract for job lifecycle reporting."""

    @abstractmethod
    def acknowledge(self, job_id: str, *, info: str, progress: int) -> None:
        """Mark a job as picked up."""

    @abstractmethod
    def complete(self, job_id: str, *, message: str) -> None:
        """Mark a job as successfully completed with a user-facing message."""

    @abstractmethod
    def fail(self, job_id: str, *, message: str) -> None:
        """Mark a job as failed with a user-facing message."""
