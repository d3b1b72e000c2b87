"""
Pure time-string arithmetic used by every availability calculation.

Times are 24-hour ``HH:MM`` strings on the wire and integer minutes since
midnight internally.
"""

import re
from datetime import date, datetime
from typing import Tuple, Union

import pendulum

from .exceptions import InvalidDate, InvalidTimeFormat

MINUTES_PER_DAY = 24 * 60
LAST_MINUTE = MINUTES_PER_DAY - 1

_TIME_PATTERN = re.compile(r"([01]\d|2[0-3]):([0-5]\d)")
_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")

Interval = Tuple[int, int]


def to_minutes(value: str) -> int:
    """
    Convert an ``HH:MM`` string to minutes since midnight.

    Raises:
        InvalidTimeFormat: If the value is not a zero-padded 24-hour time
    """
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Expected an HH:MM string, got {value!r}")

    match = _TIME_PATTERN.fullmatch(value)
    if match is None:
        raise InvalidTimeFormat(f"Invalid time '{value}', expected 24-hour HH:MM")

    return int(match.group(1)) * 60 + int(match.group(2))


def to_time_string(minutes: int) -> str:
    """Format minutes since midnight as ``HH:MM``, clamped to 00:00-23:59."""
    clamped = min(max(int(minutes), 0), LAST_MINUTE)
    return f"{clamped // 60:02d}:{clamped % 60:02d}"


def intervals_overlap(a: Interval, b: Interval) -> bool:
    """
    Check whether two half-open ``(start, end)`` minute intervals overlap.

    Touching intervals do not overlap: 09:00-10:00 and 10:00-11:00 can both
    be booked.
    """
    return a[0] < b[1] and b[0] < a[1]


def parse_date(value: Union[str, date]) -> date:
    """
    Normalise a ``YYYY-MM-DD`` string or date object to a plain calendar date.

    Raises:
        InvalidDate: If the string is not a valid ISO calendar date
    """
    if isinstance(value, datetime):
        return pendulum.date(value.year, value.month, value.day)

    if isinstance(value, date):
        return pendulum.date(value.year, value.month, value.day)

    if not isinstance(value, str):
        raise InvalidDate(f"Expected a YYYY-MM-DD string, got {value!r}")

    text = value.strip()
    if _DATE_PATTERN.fullmatch(text) is None:
        raise InvalidDate(f"Invalid date '{value}', expected YYYY-MM-DD")

    try:
        return pendulum.from_format(text, "YYYY-MM-DD").date()
    except ValueError as exc:
        raise InvalidDate(f"Invalid date '{value}', expected YYYY-MM-DD") from exc
