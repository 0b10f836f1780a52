from dataclasses import dataclass, field
from typing import Any

from app.records.fields import write_field


@dataclass(frozen=True)
class Record:
    """One sheet row as fetched from the record store."""

    id: str
    values: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FieldUpdate:
    """New scalar value for a single field."""

    field: str
    value: Any


@dataclass
class RecordUpdate:
    """Changed fields of one record; never a full-row rewrite."""

    record_id: str
    values: dict[str, FieldUpdate] = field(default_factory=dict)

    def set(self, name: str, value: Any) -> None:
        self.values[name] = FieldUpdate(field=name, value=value)

    def to_payload(self) -> dict[str, Any]:
        """Render the update in the store's wire shape."""
        return {
            "id": self.record_id,
            "values": {name: write_field(update.value) for name, update in self.values.items()},
        }
