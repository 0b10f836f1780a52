from typing import Any

from app.formatting.canonicalizer import format_phone_number, is_usa_number, to_name_case
from app.formatting.exceptions import FieldFormatError
from app.formatting.signature import duplicate_status
from app.logging.logger import Log, LogLike
from app.records import fields
from app.records.fields import read_field, unwrap
from app.records.models import Record, RecordUpdate

_NAME_FIELDS = (fields.FIRST_NAME, fields.LAST_NAME)


class DiffEngine:
    """Computes the minimal set of field updates that canonicalizes a record.

    A record whose stored values already equal their canonical and derived
    form produces no update, so repeated runs converge.
    """

    def __init__(self, log: LogLike = Log) -> None:
        self._log = log

    def diff(self, record: Record, signature: str, occurrences: int) -> RecordUpdate | None:
        """Return the changed fields of ``record`` or None when nothing changes."""
        update = RecordUpdate(record_id=record.id)

        for name in _NAME_FIELDS:
            current = read_field(record.values, name)
            cased = self._cased_name(current)
            if cased is not None and cased != current:
                update.set(name, cased)
                self._log.debug(f"Record {record.id}: {name} {current!r} -> {cased!r}")

        phone = read_field(record.values, fields.PHONE)
        stored_phone = phone
        if phone:
            formatted = self._formatted_phone(record.id, phone)
            if formatted is not None:
                stored_phone = formatted
                if formatted != str(phone):
                    update.set(fields.PHONE, formatted)
                    self._log.debug(f"Record {record.id}: phone {phone!r} -> {formatted!r}")

        is_usa = is_usa_number(stored_phone)
        current_usa = read_field(record.values, fields.IS_USA_NUMBER)
        if not isinstance(current_usa, bool) or current_usa != is_usa:
            update.set(fields.IS_USA_NUMBER, is_usa)

        status = duplicate_status(occurrences)
        if status != read_field(record.values, fields.DUPLICATE_STATUS):
            update.set(fields.DUPLICATE_STATUS, status)
            if occurrences > 1:
                self._log.debug(
                    f"Record {record.id} is a duplicate ({occurrences} total)",
                    signature=signature,
                )

        if not update.values:
            return None
        return update

    def canonical_values(self, record: Record) -> dict[str, Any]:
        """Bare field values of ``record`` with names and phone canonicalized.

        Rows that differ only in raw formatting share the same canonical
        values, and therefore the same signature.
        """
        values = {name: unwrap(raw) for name, raw in record.values.items()}
        for name in _NAME_FIELDS:
            cased = self._cased_name(values.get(name))
            if cased is not None:
                values[name] = cased
        phone = values.get(fields.PHONE)
        if phone:
            formatted = self._formatted_phone(record.id, phone, quiet=True)
            if formatted is not None:
                values[fields.PHONE] = formatted
        return values

    @staticmethod
    def _cased_name(value: Any) -> str | None:
        if not value or not isinstance(value, str):
            return None
        return to_name_case(value)

    def _formatted_phone(self, record_id: str, phone: Any, quiet: bool = False) -> str | None:
        try:
            return format_phone_number(phone)
        except FieldFormatError as exc:
            if not quiet:
                self._log.warning(f"Phone formatting failed for record {record_id}: {exc}")
            return None
