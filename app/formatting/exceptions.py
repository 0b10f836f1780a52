class FormattingError(Exception):
    """Base exception for all formatting-related errors."""


class FieldFormatError(FormattingError):
    """Raised when a single field value cannot be canonicalized."""
