"""Errors raised by the body composition engine and its collaborators."""


class BodyTrackerError(Exception):
    """Base class for application errors."""


class MeasurementValidationError(BodyTrackerError, ValueError):
    """Raised when a measurement form is missing or has non-numeric values."""


class BodyFatDomainError(BodyTrackerError, ValueError):
    """Raised when a body fat formula would take the log of a non-positive value."""


class EntryPersistenceError(BodyTrackerError, RuntimeError):
    """Raised when the entry store fails to return a created row."""
