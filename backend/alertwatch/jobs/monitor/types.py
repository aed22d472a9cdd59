from dataclasses import dataclass, field
from typing import Literal, Optional

from alertwatch.periods.types import AtomicPeriod

ChangeStatus = Literal["new", "updated", "unchanged", "removed"]


@dataclass(frozen=True)
class RawAlert:
    id: str
    header_text: Optional[str]           # "en" translation of header_text
    raw_active_period: Optional[str]     # "en" human_readable_active_period
    sort_orders: tuple[str, ...] = ()    # mercury entity selector tags, e.g. "MTASBWY:7:20"
    route_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class SelectedAlert:
    alert: RawAlert
    route_match: bool
    header_match: bool


@dataclass(frozen=True)
class NormalizedAlert:
    header: str
    raw_periods: tuple[str, ...]
    atomic_periods: tuple[AtomicPeriod, ...]
    alert_ids: tuple[str, ...] = field(default=())


@dataclass(frozen=True)
class AlertChange:
    alert_id: str
    status: ChangeStatus
    header: Optional[str]
    period: Optional[str]
    previous_header: Optional[str] = None
    previous_period: Optional[str] = None
