"""Calendar date handling for the cycle log.

All dates cross the system boundary as ``dd-mm-yyyy`` strings and live inside
the tracker as :class:`datetime.date` values.  Arithmetic is whole days on the
proleptic Gregorian calendar, so leap years and month/year rollover come from
``datetime`` itself.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta

from src.tracker.errors import DateRangeError, MalformedDateError

DATE_FORMAT = "%d-%m-%Y"

# Two-digit day, two-digit month, four-digit year
_DATE_SHAPE = re.compile(r"^\d{2}-\d{2}-\d{4}$")


def parse_date(text: str) -> date:
    """Parse a ``dd-mm-yyyy`` string into a date.

    Args:
        text: Date string, e.g. ``"15-03-2024"``.  Surrounding whitespace
              is ignored.

    Returns:
        The parsed calendar date.

    Raises:
        MalformedDateError: If the string has the wrong shape or names a day
                            that does not exist (e.g. ``31-02-2024``).
    """
    if not isinstance(text, str):
        raise MalformedDateError(repr(text), "not a string")
    candidate = text.strip()
    if not _DATE_SHAPE.match(candidate):
        raise MalformedDateError(text)
    try:
        return datetime.strptime(candidate, DATE_FORMAT).date()
    except ValueError as exc:
        raise MalformedDateError(text, str(exc)) from exc


def coerce_date(value: date | str) -> date:
    """Return ``value`` as a date, parsing it when given as a string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date(value)


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def days_between(start: date, end: date) -> int:
    """Signed number of whole days from ``start`` to ``end`` (end - start)."""
    return (end - start).days


def add_days(value: date, days: int) -> date:
    """Return the date ``days`` days after ``value``; negative goes backwards.

    Raises:
        DateRangeError: If the result falls outside years 1-9999.
    """
    try:
        return value + timedelta(days=days)
    except OverflowError as exc:
        raise DateRangeError(
            f"{format_date(value)} {days:+d} days is outside the supported calendar range"
        ) from exc
