"""In-memory store adapters.

No network calls. Updates are applied to the held records in the same
wrapper form the remote store uses, which makes these adapters suitable for
local runs and for checking that repeated runs converge.
"""

import copy
from collections.abc import Sequence
from dataclasses import dataclass

from app.records.fields import write_field
from app.records.models import Record, RecordUpdate
from app.store.base import BaseJobReporter, BaseRecordStore
from app.store.exceptions import BatchUpdateError


class InMemoryRecordStore(BaseRecordStore):
    """Keeps records per container id and applies batch updates in place."""

    def __init__(self, records: dict[str, list[Record]] | None = None) -> None:
        self._records: dict[str, list[Record]] = {
            container_id: list(rows) for container_id, rows in (records or {}).items()
        }
        self.update_calls: list[tuple[str, list[RecordUpdate]]] = []

    def fetch(self, container_id: str, *, include_messages: bool = True) -> list[Record]:
        _ = include_messages
        return [
            Record(id=record.id, values=copy.deepcopy(record.values))
            for record in self._records.get(container_id, [])
        ]

    def batch_update(self, container_id: str, updates: Sequence[RecordUpdate]) -> None:
        rows = {record.id: record for record in self._records.get(container_id, [])}
        missing = [update.record_id for update in updates if update.record_id not in rows]
        if missing:
            raise BatchUpdateError(f"Unknown record ids in sheet {container_id}: {missing}")
        self.update_calls.append((container_id, list(updates)))
        for update in updates:
            values = rows[update.record_id].values
            for name, field_update in update.values.items():
                values[name] = write_field(field_update.value)


@dataclass
class JobEvent:
    job_id: str
    action: str
    message: str
    progress: int | None = None


class InMemoryJobReporter(BaseJobReporter):
    """Records job lifecycle calls instead of sending them."""

    def __init__(self) -> None:
        self.events: list[JobEvent] = []

    def acknowledge(self, job_id: str, *, info: str, progress: int) -> None:
        self.events.append(JobEvent(job_id, "ack", info, progress))

    def complete(self, job_id: str, *, message: str) -> None:
        self.events.append(JobEvent(job_id, "complete", message))

    def fail(self, job_id: str, *, message: str) -> None:
        self.events.append(JobEvent(job_id, "fail", message))
