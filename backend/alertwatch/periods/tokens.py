import re
from dataclasses import dataclass
from datetime import date as Date, datetime

CLOCK_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s+([AaPp][Mm])\s*$")
MONTH_DAY_RE = re.compile(r"^\s*([A-Za-z]{3})\s+(\d{1,2})\s*$")

MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

# Sunday=0..Saturday=6
WEEKDAYS = {
    "sun": 0,
    "mon": 1,
    "tue": 2,
    "wed": 3,
    "thu": 4,
    "fri": 5,
    "sat": 6,
}


class FormatError(ValueError):
    """A token had the right coarse shape but could not be parsed."""


@dataclass(frozen=True)
class ClockTime:
    hour: int
    minute: int

    def on(self, day: Date) -> datetime:
        return datetime(day.year, day.month, day.day, self.hour, self.minute)


def parse_clock_time(text: str) -> ClockTime:
    """
    Parse "H:MM AM" / "H:MM pm" into a 24h ClockTime.
      12 AM -> 0
      1..11 PM -> 13..23
      anything else passes the hour through
    """
    m = CLOCK_TIME_RE.match(text or "")
    if not m:
        raise FormatError(f"Bad clock time: {text!r}")

    hour = int(m.group(1))
    minute = int(m.group(2))
    marker = m.group(3).upper()

    if marker == "AM" and hour == 12:
        hour = 0
    elif marker == "PM" and hour < 12:
        hour += 12

    if hour > 23 or minute > 59:
        raise FormatError(f"Clock time out of range: {text!r}")
    return ClockTime(hour=hour, minute=minute)


def parse_month_day(text: str, assumed_year: int) -> Date:
    """Parse "Feb 25" into a date in assumed_year. The year is never inferred."""
    m = MONTH_DAY_RE.match(text or "")
    if not m:
        raise FormatError(f"Bad month/day: {text!r}")

    month = MONTHS.get(m.group(1).lower())
    if month is None:
        raise FormatError(f"Unknown month abbreviation: {m.group(1)!r}")

    try:
        return Date(assumed_year, month, int(m.group(2)))
    except ValueError as e:
        raise FormatError(f"Bad day for {text!r} in {assumed_year}: {e}") from e


def parse_weekday(text: str) -> int:
    wd = WEEKDAYS.get((text or "").strip().lower())
    if wd is None:
        raise FormatError(f"Unknown weekday abbreviation: {text!r}")
    return wd
