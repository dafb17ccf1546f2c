class LunaphaseError(Exception):
    """Base error."""

class InvalidIndexError(LunaphaseError, ValueError):
    """Raised when a lunation index is NaN or infinite."""

class DateRangeError(LunaphaseError, ValueError):
    """Raised when an instant falls outside the years 1-9999 a datetime can hold."""

class AccuracyWarning(UserWarning):
    """Issued for lunation indices far from the year-2000 reference epoch."""
