from app.formatting.canonicalizer import format_phone_number, is_usa_number, to_name_case
from app.formatting.diff import DiffEngine
from app.formatting.signature import count_signatures, duplicate_status, row_signature

__all__ = [
    "DiffEngine",
    "count_signatures",
    "duplicate_status",
    "format_phone_number",
    "is_usa_number",
    "row_signature",
    "to_name_case",
]
