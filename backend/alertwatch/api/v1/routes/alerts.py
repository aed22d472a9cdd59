from __future__ import annotations

import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from alertwatch.api.v1.schemas.alerts import AtomicPeriodOut, NormalizeResponse, NormalizedAlertOut
from alertwatch.core.deps import get_db
from alertwatch.jobs.monitor.aggregate import aggregate_alerts
from alertwatch.jobs.monitor.config import MonitorConfig, load_config
from alertwatch.jobs.monitor.render import render_page
from alertwatch.jobs.monitor.selector import select_alerts
from alertwatch.jobs.monitor.snapshot import classify_changes
from alertwatch.jobs.monitor.sources.base import BaseFeedSource
from alertwatch.jobs.monitor.sources.mta.source import MtaAlertsSource
from alertwatch.jobs.monitor.types import AlertChange, NormalizedAlert
from alertwatch.periods.normalizer import STRATEGIES, build_normalizer
from alertwatch.periods.tokens import FormatError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["alerts"])


def get_config() -> MonitorConfig:
    return load_config()


def get_source() -> BaseFeedSource:
    return MtaAlertsSource()


def _current_alerts(
    source: BaseFeedSource,
    cfg: MonitorConfig,
    db: Session,
    year: Optional[int],
) -> tuple[list[NormalizedAlert], list[AlertChange]]:
    if not cfg.header_phrase:
        raise HTTPException(status_code=500, detail="ALERTS_HEADER_PHRASE is not configured")

    try:
        raw_alerts = source.fetch()
    except (httpx.HTTPError, ValueError) as e:
        logger.exception("Feed fetch failed: %r", e)
        raise HTTPException(status_code=502, detail="Service alert feed unavailable")

    selected = select_alerts(
        raw_alerts,
        sort_order=cfg.route_sort_order,
        header_phrase=cfg.header_phrase,
        require_route_match=cfg.require_route_match,
    )
    # read-only: only the monitor job moves the snapshot forward
    changes = classify_changes(db, [sa.alert for sa in selected])
    normalizer = build_normalizer(cfg.period_strategy, strict=False)
    return aggregate_alerts(selected, normalizer, year or cfg.assumed_year), changes


@router.get("/periods/normalize", response_model=NormalizeResponse)
def normalize_period(
    text: str = Query(..., min_length=1, description="Active period text as published"),
    year: int = Query(..., ge=1, le=9998, description="Year assumed for 'Mon D' dates"),
    strategy: str = Query("grammar"),
    strict: bool = Query(False),
):
    if strategy not in STRATEGIES:
        raise HTTPException(status_code=400, detail=f"strategy must be one of {sorted(STRATEGIES)}")

    normalizer = build_normalizer(strategy, strict=strict)
    try:
        periods = normalizer.normalize(text, year)
    except FormatError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return NormalizeResponse(
        text=text,
        year=year,
        strategy=strategy,
        periods=[AtomicPeriodOut.from_period(p) for p in periods],
    )


@router.get("/alerts", response_model=list[NormalizedAlertOut])
def get_alerts(
    year: Optional[int] = Query(None, ge=1, le=9998),
    cfg: MonitorConfig = Depends(get_config),
    source: BaseFeedSource = Depends(get_source),
    db: Session = Depends(get_db),
):
    alerts, changes = _current_alerts(source, cfg, db, year)
    status_by_id = {c.alert_id: c.status for c in changes}
    return [NormalizedAlertOut.from_alert(a, status_by_id) for a in alerts]


@router.get("/alerts/page", response_class=HTMLResponse)
def get_alerts_page(
    year: Optional[int] = Query(None, ge=1, le=9998),
    cfg: MonitorConfig = Depends(get_config),
    source: BaseFeedSource = Depends(get_source),
    db: Session = Depends(get_db),
):
    alerts, changes = _current_alerts(source, cfg, db, year)
    return HTMLResponse(render_page(alerts, changes=changes, title=cfg.page_title))
