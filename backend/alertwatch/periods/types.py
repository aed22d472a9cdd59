from dataclasses import dataclass
from datetime import datetime
from typing import Union

from .time import format_ts

PeriodBound = Union[datetime, str]


@dataclass(frozen=True)
class AtomicPeriod:
    # Both bounds are datetimes for a normalized period; both are the original
    # text for a degenerate (unparsed) one.
    start: PeriodBound
    end: PeriodBound

    @classmethod
    def degenerate(cls, text: str) -> "AtomicPeriod":
        return cls(start=text, end=text)

    @property
    def is_degenerate(self) -> bool:
        return not isinstance(self.start, datetime) or not isinstance(self.end, datetime)

    def start_text(self) -> str:
        return format_ts(self.start) if isinstance(self.start, datetime) else self.start

    def end_text(self) -> str:
        return format_ts(self.end) if isinstance(self.end, datetime) else self.end

    def as_dict(self) -> dict:
        return {"start": self.start_text(), "end": self.end_text()}


def sort_key(period: AtomicPeriod) -> tuple:
    # Degenerate periods go last; sorted() is stable so they keep input order.
    if period.is_degenerate:
        return (1, datetime.min)
    return (0, period.start)


def sort_periods(periods: list[AtomicPeriod]) -> list[AtomicPeriod]:
    return sorted(periods, key=sort_key)
