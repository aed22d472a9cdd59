"""
Alert snapshot: alert_id -> (header, period) last seen.

classify_changes() compares the current alerts against the stored rows:
  new        id not stored
  updated    id stored, header or period differs
  unchanged  id stored, same header and period
  removed    id stored but absent from the current alerts

save_snapshot() then makes the stored rows equal to the current alerts and
stamps last_seen_at on every alert still listed.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from alertwatch.jobs.monitor.types import AlertChange, RawAlert
from alertwatch.models.alert_snapshots import AlertSnapshot

logger = logging.getLogger(__name__)


def _load(db: Session) -> dict[str, AlertSnapshot]:
    return {row.alert_id: row for row in db.execute(select(AlertSnapshot)).scalars()}


def classify_changes(db: Session, alerts: Iterable[RawAlert]) -> list[AlertChange]:
    stored = _load(db)
    changes: list[AlertChange] = []
    seen: set[str] = set()

    for ra in alerts:
        if ra.id in seen:
            continue
        seen.add(ra.id)
        prev = stored.get(ra.id)
        if prev is None:
            status = "new"
        elif prev.header == ra.header_text and prev.period == ra.raw_active_period:
            status = "unchanged"
        else:
            status = "updated"

        changes.append(
            AlertChange(
                alert_id=ra.id,
                status=status,
                header=ra.header_text,
                period=ra.raw_active_period,
                previous_header=prev.header if prev is not None else None,
                previous_period=prev.period if prev is not None else None,
            )
        )

    for alert_id in sorted(set(stored) - seen):
        prev = stored[alert_id]
        changes.append(
            AlertChange(
                alert_id=alert_id,
                status="removed",
                header=None,
                period=None,
                previous_header=prev.header,
                previous_period=prev.period,
            )
        )

    for c in changes:
        if c.status != "unchanged":
            logger.info("Alert %s %s header=%r period=%r", c.alert_id, c.status, c.header, c.period)
    return changes


def save_snapshot(
    db: Session,
    alerts: Iterable[RawAlert],
    *,
    seen_at: Optional[datetime] = None,
    commit: bool = True,
) -> dict:
    seen_at = seen_at or datetime.utcnow()
    stored = _load(db)
    current_ids: set[str] = set()
    inserted = 0
    updated = 0

    for ra in alerts:
        if ra.id in current_ids:
            continue
        current_ids.add(ra.id)
        row = stored.get(ra.id)
        if row is None:
            db.add(
                AlertSnapshot(
                    alert_id=ra.id,
                    header=ra.header_text,
                    period=ra.raw_active_period,
                    first_seen_at=seen_at,
                    last_seen_at=seen_at,
                )
            )
            inserted += 1
            continue
        row.last_seen_at = seen_at
        if row.header != ra.header_text or row.period != ra.raw_active_period:
            row.header = ra.header_text
            row.period = ra.raw_active_period
            updated += 1

    stale = set(stored) - current_ids
    if stale:
        db.execute(delete(AlertSnapshot).where(AlertSnapshot.alert_id.in_(stale)))

    if commit:
        db.commit()
    else:
        db.flush()

    return {"snapshot_inserted": inserted, "snapshot_updated": updated, "snapshot_removed": len(stale)}
