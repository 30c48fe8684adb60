"""Exception types raised by the cycle tracker core."""

from __future__ import annotations


class TrackerError(Exception):
    """Base class for all cycle tracker errors."""


class NoDataError(TrackerError, LookupError):
    """Raised when an operation needs at least one recorded cycle."""


class MalformedDateError(TrackerError, ValueError):
    """Raised when a date string does not match the dd-mm-yyyy format.

    Attributes:
        text: The rejected input, as given.
    """

    def __init__(self, text: str, reason: str = "") -> None:
        self.text = text
        message = f"Invalid date {text!r}: expected dd-mm-yyyy"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidCycleError(TrackerError, ValueError):
    """Raised by input validation when a cycle's start date is after its end date."""


class DateRangeError(TrackerError, OverflowError):
    """Raised when date arithmetic leaves the supported calendar (years 1-9999)."""
