"""
Grammar-based expansion of agency active-period text.

Two shapes are recognized, tried in this order:

  A) explicit date list + one shared daily window
       "Feb 25 and Mar 4, Tuesdays, 12:45 AM to 5:00 AM"
     -> one period per listed date

  B) weekday-to-weekday window repeating over a date range
       "Sat 12:15 AM to Mon 5:00 AM, Feb 22 - Mar 17"
     -> one period per weekly occurrence of the start weekday inside the range

Anything else is "not recognized" (None) and left to the caller's fallback.
"""

from __future__ import annotations

import logging
import re
from datetime import date, timedelta
from typing import Optional

from .strategy import PeriodNormalizationStrategy
from .time import roll_if_next_day, sunday_dow
from .tokens import FormatError, parse_clock_time, parse_month_day, parse_weekday
from .types import AtomicPeriod

logger = logging.getLogger(__name__)

_MONTH_DAY = r"[A-Za-z]{3}\s+\d{1,2}"
_CLOCK = r"\d{1,2}:\d{2}\s+[AaPp][Mm]"

GRAMMAR_A_RE = re.compile(
    rf"""^\s*
    (?P<dates>{_MONTH_DAY}(?:\s+and\s+{_MONTH_DAY})+)
    \s*,\s*
    (?P<weekdays>[A-Za-z][A-Za-z &]*?)
    \s*,\s*
    (?P<start>{_CLOCK})\s+to\s+(?P<end>{_CLOCK})
    \s*$""",
    re.VERBOSE,
)

GRAMMAR_B_RE = re.compile(
    rf"""^\s*
    (?P<start_day>[A-Za-z]{{3}})\s+(?P<start>{_CLOCK})
    \s+to\s+
    (?P<end_day>[A-Za-z]{{3}})\s+(?P<end>{_CLOCK})
    \s*,\s*
    (?P<range_start>{_MONTH_DAY})\s*[-–]\s*(?P<range_end>{_MONTH_DAY})
    \s*$""",
    re.VERBOSE,
)

_AND_RE = re.compile(r"\s+and\s+")


def expand_date_list(m: re.Match, assumed_year: int) -> list[AtomicPeriod]:
    start_time = parse_clock_time(m.group("start"))
    end_time = parse_clock_time(m.group("end"))

    out: list[AtomicPeriod] = []
    for token in _AND_RE.split(m.group("dates").strip()):
        day = parse_month_day(token, assumed_year)
        start = start_time.on(day)
        # "11:00 PM to 1:00 AM" crosses midnight
        end = roll_if_next_day(start, end_time.on(day))
        out.append(AtomicPeriod(start=start, end=end))
    return out


def first_on_or_after(d: date, weekday: int) -> date:
    """First date >= d whose Sunday-based day of week equals weekday."""
    while sunday_dow(d) != weekday:
        d += timedelta(days=1)
    return d


def expand_weekly_window(m: re.Match, assumed_year: int) -> list[AtomicPeriod]:
    range_start = parse_month_day(m.group("range_start"), assumed_year)
    # both ends share assumed_year; "Dec 27 - Jan 6" is an empty range
    range_end = parse_month_day(m.group("range_end"), assumed_year)

    start_wd = parse_weekday(m.group("start_day"))
    end_wd = parse_weekday(m.group("end_day"))
    start_time = parse_clock_time(m.group("start"))
    end_time = parse_clock_time(m.group("end"))

    day_offset = (end_wd - start_wd + 7) % 7

    out: list[AtomicPeriod] = []
    occurrence = first_on_or_after(range_start, start_wd)
    while occurrence <= range_end:
        period_start = start_time.on(occurrence)
        period_end = end_time.on(occurrence + timedelta(days=day_offset))

        if range_start <= period_start.date() <= range_end or range_start <= period_end.date() <= range_end:
            out.append(AtomicPeriod(start=period_start, end=period_end))

        occurrence += timedelta(days=7)
    return out


def _guard_calendar(expand, m: re.Match, assumed_year: int) -> list[AtomicPeriod]:
    """Date arithmetic that leaves the datetime range (year 1..9999) is a token problem too."""
    try:
        return expand(m, assumed_year)
    except FormatError:
        raise
    except (OverflowError, ValueError) as e:
        raise FormatError(f"Date out of range for {m.group(0).strip()!r} in {assumed_year}: {e}") from e


class GrammarStrategy(PeriodNormalizationStrategy):
    """Deterministic reference strategy: grammar A, then grammar B."""

    name = "grammar"

    def expand(self, period_text: str, assumed_year: int) -> Optional[list[AtomicPeriod]]:
        m = GRAMMAR_A_RE.match(period_text)
        if m:
            periods = _guard_calendar(expand_date_list, m, assumed_year)
            logger.debug("Grammar A matched %r -> %d periods", period_text, len(periods))
            return periods

        m = GRAMMAR_B_RE.match(period_text)
        if m:
            periods = _guard_calendar(expand_weekly_window, m, assumed_year)
            logger.debug("Grammar B matched %r -> %d periods", period_text, len(periods))
            # a range too short to contain the start weekday, or one running
            # past Dec 31 of assumed_year, yields nothing
            return periods or None

        return None
