"""Order-independent row signatures used to count duplicates within a batch."""

from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Any

from app.records.fields import DERIVED_FIELDS, unwrap

SIGNATURE_DELIMITER = "|"

DUPLICATE_STATUS_TEMPLATE = "⚠️ Duplicate ({count} total)"
UNIQUE_STATUS = "✅ Unique"


def row_signature(
    values: Mapping[str, Any],
    exclude: Iterable[str] = DERIVED_FIELDS,
) -> str:
    """Build the sorted ``field:value`` fingerprint of a field map.

    Fields named in ``exclude`` are left out so that values the formatter
    writes itself cannot change the signature between runs.
    """
    excluded = frozenset(exclude)
    pairs = [
        f"{name}:{_render(unwrap(raw))}"
        for name, raw in values.items()
        if name not in excluded
    ]
    pairs.sort()
    return SIGNATURE_DELIMITER.join(pairs)


def _render(value: Any) -> str:
    return "" if value is None else str(value)


def count_signatures(signatures: Iterable[str]) -> Counter[str]:
    return Counter(signatures)


def duplicate_status(occurrences: int) -> str:
    """Status string stored in the duplicate-status field."""
    if occurrences > 1:
        return DUPLICATE_STATUS_TEMPLATE.format(count=occurrences)
    return UNIQUE_STATUS
