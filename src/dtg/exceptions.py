class DTGError(Exception):
    """Base class for custom errors in the dtg package."""


class InvalidDTGError(DTGError):
    """Raised when a Date-Time Group string, or one of its fields, is not valid."""

    def __init__(self, cause: str, value: str | None = None):
        self.cause = cause
        self.value = value
        if value is None:
            msg = cause
        else:
            msg = f"Invalid DTG '{value}': {cause}"
        super().__init__(msg)


class InvalidFormatError(InvalidDTGError):
    """Raised when the input does not match any accepted DTG shape."""


class FieldRangeError(InvalidDTGError):
    """Raised when a numeric field (day, hour, minute) is outside of its valid range."""


class UnknownLetterError(InvalidDTGError):
    """Raised when a time zone letter is not part of the military time zone alphabet."""


class UnknownMonthError(InvalidDTGError):
    """Raised when a month is not one of the twelve three-letter English abbreviations."""


class UnknownOffsetError(DTGError):
    """Raised when a UTC offset has no corresponding time zone letter."""


class ColumnNotFoundError(DTGError):
    """Raised when a requested column does not exist."""


class UnhandledEnumError(DTGError):
    """Base class for unhandled enumeration related errors."""
