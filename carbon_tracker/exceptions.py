"""Domain exceptions."""


class CarbonTrackerError(Exception):
    """Base class for all application errors."""


class ValidationError(CarbonTrackerError):
    """Raised when input violates a domain rule (e.g. unknown activity)."""


class NotFoundError(CarbonTrackerError):
    """Raised when a requested resource does not exist."""
