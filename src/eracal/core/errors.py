class EracalError(Exception):
    """Base error."""

class InvalidEraTableError(EracalError, ValueError):
    """Raised at construction when eras are out of order, overlapping or malformed."""

class InvalidDateError(EracalError, ValueError):
    """Raised when an era/year/month/day does not name a real date in that era."""

class UnknownEraError(EracalError, LookupError):
    """Raised when an era lookup by name fails."""

class CalendarOverflowError(EracalError, OverflowError):
    """Raised when date arithmetic leaves the representable instant range."""
