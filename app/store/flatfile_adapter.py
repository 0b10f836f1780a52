from collections.abc import Sequence
from typing import Any

import httpx

from app.logging.logger import Log, LogLike
from app.records.models import Record, RecordUpdate
from app.store.base import BaseJobReporter, BaseRecordStore
from app.store.envelope import extract_records
from app.store.exceptions import BatchUpdateError, FetchAttemptError, JobReportError


def build_http_client(
    *,
    base_url: str,
    api_key: str,
    timeout_seconds: int,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an authenticated client for the Flatfile REST API."""
    return httpx.Client(
        base_url=base_url.rstrip("/"),
        headers={"Authorization": f"Bearer {api_key}"},
        timeout=timeout_seconds,
        transport=transport,
    )


class FlatfileRecordStore(BaseRecordStore):
    """Record store adapter built on the Flatfile sheets/records API."""

    def __init__(self, client: httpx.Client, log: LogLike = Log) -> None:
        self._client = client
        self._log = log

    def close(self) -> None:
        """Close the HTTP client; a reporter sharing it is closed as well."""
        self._client.close()

    def fetch(self, container_id: str, *, include_messages: bool = True) -> list[Record]:
        try:
            response = self._client.get(
                f"/v1/sheets/{container_id}/records",
                params={"includeMessages": str(include_messages).lower()},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise FetchAttemptError(
                f"Record fetch rejected with status {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchAttemptError(f"Record fetch network error: {exc}") from exc
        except ValueError as exc:
            raise FetchAttemptError(f"Record fetch returned invalid JSON: {exc}") from exc
        records = extract_records(payload, log=self._log)
        self._log.debug(f"Fetched {len(records)} records from sheet {container_id}")
        return records

    def batch_update(self, container_id: str, updates: Sequence[RecordUpdate]) -> None:
        body = [update.to_payload() for update in updates]
        try:
            response = self._client.put(f"/v1/sheets/{container_id}/records", json=body)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise BatchUpdateError(
                f"Batch update rejected with status {exc.response.status_code}: "
                f"{exc.response.text}"
            ) from exc
        except httpx.HTTPError as exc:
            raise BatchUpdateError(f"Batch update network error: {exc}") from exc


class FlatfileJobReporter(BaseJobReporter):
    """Job lifecycle reporter built on the Flatfile jobs API."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def acknowledge(self, job_id: str, *, info: str, progress: int) -> None:
        self._post(job_id, "ack", {"info": info, "progress": progress})

    def complete(self, job_id: str, *, message: str) -> None:
        self._post(job_id, "complete", {"outcome": {"message": message}})

    def fail(self, job_id: str, *, message: str) -> None:
        self._post(job_id, "fail", {"outcome": {"message": message}})

    def _post(self, job_id: str, action: str, body: dict[str, Any]) -> None:
        try:
            response = self._client.post(f"/v1/jobs/{job_id}/{action}", json=body)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise JobReportError(f"Job {action} failed for {job_id}: {exc}") from exc
