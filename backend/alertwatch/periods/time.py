from datetime import date, datetime, timedelta

TS_FORMAT = "%Y-%m-%d %H:%M:%S"


def sunday_dow(d: date) -> int:
    """Day of week with Sunday=0..Saturday=6 (Python's weekday() is Mon=0..Sun=6)."""
    return (d.weekday() + 1) % 7


def roll_if_next_day(start: datetime, end: datetime) -> datetime:
    """
    If end is earlier than start, treat it as the next day (after midnight rollover).
    """
    if end < start:
        return end + timedelta(days=1)
    return end


def format_ts(value: datetime) -> str:
    return value.strftime(TS_FORMAT)
