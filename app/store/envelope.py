"""Normalizes the record list envelopes returned by the store API."""

from typing import Any

from app.logging.logger import Log, LogLike
from app.records.models import Record
from app.store.exceptions import FetchAttemptError


def extract_records(payload: Any, log: LogLike = Log) -> list[Record]:
    """Flatten a fetch response into an ordered list of records.

    Accepted shapes: ``{"data": {"records": [...]}}``, ``{"data": [...]}``
    and a bare list. Any other shape yields an empty list; entries without
    an id or a values mapping are skipped.

    Raises:
        FetchAttemptError: if the payload is neither a mapping nor a list.
    """
    items = _locate_items(payload)
    records: list[Record] = []
    for index, item in enumerate(items):
        record = _build_record(item)
        if record is None:
            log.warning(f"Skipping malformed record at index {index}")
            continue
        records.append(record)
    return records


def _locate_items(payload: Any) -> list[Any]:
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, dict):
        raise FetchAttemptError(
            f"Unexpected response type: {type(payload).__name__}"
        )
    data = payload.get("data")
    if isinstance(data, dict) and isinstance(data.get("records"), list):
        return data["records"]
    if isinstance(data, list):
        return data
    return []


def _build_record(item: Any) -> Record | None:
    if not isinstance(item, dict):
        return None
    record_id = item.get("id")
    values = item.get("values")
    if record_id is None or not isinstance(values, dict):
        return None
    return Record(id=str(record_id), values=dict(values))
