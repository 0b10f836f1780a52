class StoreError(Exception):
    """Base exception for all record store and job control errors."""


class FetchAttemptError(StoreError):
    """Raised when a single fetch attempt fails or returns a malformed response."""


class BatchUpdateError(StoreError):
    """Raised when the store rejects a batch update."""


class JobReportError(StoreError):
    """Raised when a job acknowledgment, completion or failure call fails."""
