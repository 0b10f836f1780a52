"""Field names of the contacts sheet and the bare-or-wrapped value accessor."""

from collections.abc import Mapping
from typing import Any

FIRST_NAME = "firstName"
LAST_NAME = "lastName"
EMAIL = "email"
PHONE = "phone"
IS_USA_NUMBER = "isUSANumber"
DUPLICATE_STATUS = "duplicateStatus"

# Fields written by the formatter as classification output, never signed.
DERIVED_FIELDS = frozenset({IS_USA_NUMBER, DUPLICATE_STATUS})


def read_field(values: Mapping[str, Any], name: str) -> Any:
    """Return the bare value of a field.

    Stored values arrive either as scalars or as wrapper mappings such as
    ``{"value": "Ada", "messages": [...]}``. A wrapper without a ``value``
    key and an absent field both read as ``None``.
    """
    return unwrap(values.get(name))


def unwrap(raw: Any) -> Any:
    if isinstance(raw, Mapping):
        return raw.get("value")
    return raw


def write_field(value: Any) -> dict[str, Any]:
    """Return the wrapper form every field update is written in."""
    return {"value": value}
