"""Domain-specific exceptions for the purchase tracker core."""

class ValidationError(ValueError):
    """Raised when caller-supplied data does not meet validation requirements."""


class RecordNotFoundError(LookupError):
    """Raised when a purchase with the requested id cannot be located."""


class PersistenceError(IOError):
    """Raised when the store file cannot be read, created, or written."""


class ParseError(PersistenceError):
    """Raised when the store file does not contain a valid purchase array."""
