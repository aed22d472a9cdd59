import logging
from typing import Iterable

from alertwatch.jobs.monitor.types import NormalizedAlert, SelectedAlert
from alertwatch.periods.normalizer import PeriodNormalizer
from alertwatch.periods.types import AtomicPeriod, sort_periods

logger = logging.getLogger(__name__)


def aggregate_alerts(
    selected: Iterable[SelectedAlert],
    normalizer: PeriodNormalizer,
    assumed_year: int,
) -> list[NormalizedAlert]:
    """
    Merge selected alerts sharing a header into one NormalizedAlert each.
    Groups keep the order in which their header first appeared; periods are
    concatenated across the group and sorted once.
    """
    order: list[str] = []
    raw_periods: dict[str, list[str]] = {}
    periods: dict[str, list[AtomicPeriod]] = {}
    alert_ids: dict[str, list[str]] = {}

    for sa in selected:
        header = sa.alert.header_text or ""
        if header not in raw_periods:
            order.append(header)
            raw_periods[header] = []
            periods[header] = []
            alert_ids[header] = []

        alert_ids[header].append(sa.alert.id)

        text = sa.alert.raw_active_period
        if not text:
            logger.debug("Alert %s has no active period text", sa.alert.id)
            continue
        raw_periods[header].append(text)
        periods[header].extend(normalizer.normalize(text, assumed_year))

    out = [
        NormalizedAlert(
            header=h,
            raw_periods=tuple(raw_periods[h]),
            atomic_periods=tuple(sort_periods(periods[h])),
            alert_ids=tuple(alert_ids[h]),
        )
        for h in order
    ]
    logger.info("Aggregated %d alerts into %d headers", sum(len(v) for v in alert_ids.values()), len(out))
    return out
