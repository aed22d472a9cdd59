from typing import Mapping, Optional

from pydantic import BaseModel, Field

from alertwatch.jobs.monitor.types import NormalizedAlert
from alertwatch.periods.types import AtomicPeriod

class AtomicPeriodOut(BaseModel):
    start: str = Field(..., description="YYYY-MM-DD HH:MM:SS, or the raw text when not normalized")
    end: str = Field(..., description="YYYY-MM-DD HH:MM:SS, or the raw text when not normalized")
    normalized: bool

    @classmethod
    def from_period(cls, period: AtomicPeriod) -> "AtomicPeriodOut":
        return cls(start=period.start_text(), end=period.end_text(), normalized=not period.is_degenerate)


class NormalizeResponse(BaseModel):
    text: str
    year: int
    strategy: str
    periods: list[AtomicPeriodOut]


class NormalizedAlertOut(BaseModel):
    header: str
    raw_periods: list[str]
    atomic_periods: list[AtomicPeriodOut]
    alert_ids: list[str]
    alert_status: dict[str, str] = Field(
        default_factory=dict,
        description="new / updated / unchanged per alert id, compared with the last monitor run",
    )

    @classmethod
    def from_alert(cls, alert: NormalizedAlert, status_by_id: Optional[Mapping[str, str]] = None) -> "NormalizedAlertOut":
        status_by_id = status_by_id or {}
        return cls(
            header=alert.header,
            raw_periods=list(alert.raw_periods),
            atomic_periods=[AtomicPeriodOut.from_period(p) for p in alert.atomic_periods],
            alert_ids=list(alert.alert_ids),
            alert_status={i: status_by_id[i] for i in alert.alert_ids if i in status_by_id},
        )


class HealthOut(BaseModel):
    status: str
