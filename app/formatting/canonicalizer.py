"""Pure canonicalization rules for contact fields: names, phones, USA numbers."""

import re
from typing import Any

from app.formatting.exceptions import FieldFormatError

_WORD_START = re.compile(r"\b\w")
_NON_DIGITS = re.compile(r"\D", re.ASCII)
_USA_PREFIX = re.compile(r"\+1\d", re.ASCII)
_TEN_DIGITS = re.compile(r"\d{10}", re.ASCII)
_FORMATTED_USA_TAIL = re.compile(r"\d\s?\(\d{3}\)\s?\d{3}-\d{4}", re.ASCII)


def to_name_case(value: Any) -> str:
    """Capitalize the first letter of each word: "DANIELLE ADAMS" -> "Danielle Adams"."""
    if not value or not isinstance(value, str):
        return ""
    return _WORD_START.sub(_upper_first, value.lower())


def _upper_first(match: re.Match[str]) -> str:
    letter = match.group()
    upper = letter.upper()
    # "ß".upper() == "SS" would not survive a second lower()/upper() pass.
    return upper if len(upper) == 1 else letter


def format_phone_number(value: Any) -> str:
    """Format a phone value as "+1 (AAA) PPP-LLLL" or a best-effort "+<digits>".

    Values already starting with "+" are treated as canonical and returned
    unchanged.

    Raises:
        FieldFormatError: if the value is not a string or number, or holds no digits.
    """
    phone = _stringify(value)
    if phone.startswith("+"):
        return phone

    digits = _NON_DIGITS.sub("", phone)
    if len(digits) == 10:
        return _format_nanp(digits)
    if len(digits) == 11 and digits.startswith("1"):
        return _format_nanp(digits[1:])
    if not digits:
        raise FieldFormatError(f"Phone value {value!r} contains no digits")
    return f"+{digits}"


def _format_nanp(digits: str) -> str:
    return f"+1 ({digits[:3]}) {digits[3:6]}-{digits[6:]}"


def is_usa_number(value: Any) -> bool:
    """Return True when the phone value is a North-American (+1) number.

    A "+1" prefix is checked structurally first so that long international
    numbers beginning with the digit 1 are not mistaken for USA numbers;
    only unprefixed values fall back to counting digits.
    """
    if not value:
        return False
    try:
        phone = _stringify(value)
    except FieldFormatError:
        return False

    if phone.startswith("+1 "):
        return True

    if _USA_PREFIX.match(phone):
        after_prefix = phone[2:]
        if _TEN_DIGITS.fullmatch(after_prefix) or _FORMATTED_USA_TAIL.fullmatch(after_prefix):
            return True
        if len(after_prefix) > 10:
            return False

    digits = _NON_DIGITS.sub("", phone)
    return len(digits) == 10 or (len(digits) == 11 and digits.startswith("1"))


def _stringify(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise FieldFormatError(f"Unsupported phone value type: {type(value).__name__}")
    if isinstance(value, float):
        if not value.is_integer():
            raise FieldFormatError(f"Phone value {value!r} is not a whole number")
        return str(int(value))
    return str(value).strip()
