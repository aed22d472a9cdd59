import argparse
import dataclasses
import logging
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from alertwatch.core.db import SessionLocal, init_db
from alertwatch.jobs.monitor.aggregate import aggregate_alerts
from alertwatch.jobs.monitor.registry import SOURCES
from alertwatch.jobs.monitor.render import render_page, write_page
from alertwatch.jobs.monitor.selector import select_alerts
from alertwatch.jobs.monitor.snapshot import classify_changes, save_snapshot
from alertwatch.jobs.monitor.sources.base import BaseFeedSource
from alertwatch.jobs.monitor.config import MonitorConfig, load_config
from alertwatch.jobs.monitor.sources.mta.http import configure_logging_if_needed
from alertwatch.models.job_runs import JobRun
from alertwatch.periods.normalizer import build_normalizer

logger = logging.getLogger(__name__)


def run_monitor(db: Session, source: BaseFeedSource, cfg: MonitorConfig) -> dict:
    """
    fetch -> select -> diff against snapshot -> normalize/aggregate -> render -> save snapshot.
    Returns a dict of counts for job_runs.meta.
    """
    normalizer = build_normalizer(cfg.period_strategy, strict=cfg.strict)

    raw_alerts = source.fetch()
    selected = select_alerts(
        raw_alerts,
        sort_order=cfg.route_sort_order,
        header_phrase=cfg.header_phrase,
        require_route_match=cfg.require_route_match,
    )
    current = [sa.alert for sa in selected]

    changes = classify_changes(db, current)
    normalized = aggregate_alerts(selected, normalizer, cfg.assumed_year)

    html = render_page(normalized, changes=changes, title=cfg.page_title)
    out_path = write_page(cfg.output_path, html)
    logger.info("Wrote %s", out_path)

    snapshot_stats = save_snapshot(db, current)

    counts = {status: 0 for status in ("new", "updated", "unchanged", "removed")}
    for c in changes:
        counts[c.status] += 1

    return {
        "alerts_total": len(raw_alerts),
        "alerts_selected": len(selected),
        "alerts_route_matched": sum(1 for sa in selected if sa.route_match),
        "headers": len(normalized),
        "atomic_periods": sum(len(na.atomic_periods) for na in normalized),
        "degenerate_periods": sum(1 for na in normalized for p in na.atomic_periods if p.is_degenerate),
        "assumed_year": cfg.assumed_year,
        "strategy": normalizer.strategy.name,
        "output_path": str(out_path),
        **counts,
        **snapshot_stats,
    }


def apply_overrides(cfg: MonitorConfig, args: argparse.Namespace) -> MonitorConfig:
    overrides: dict = {}
    if args.year is not None:
        overrides["assumed_year"] = args.year
    if args.phrase:
        overrides["header_phrase"] = args.phrase
    if args.output:
        overrides["output_path"] = args.output
    if args.strategy:
        overrides["period_strategy"] = args.strategy
    if args.strict:
        overrides["strict"] = True
    if args.require_route_match:
        overrides["require_route_match"] = True
    return dataclasses.replace(cfg, **overrides)


def main(argv: Optional[list[str]] = None):
    p = argparse.ArgumentParser(description="Fetch service alerts, normalize active periods and render the alert page")
    p.add_argument("--source", default="mta", choices=SOURCES.keys())

    p.add_argument("--year", type=int, help="Year assumed for 'Mon D' dates (default: ALERTS_ASSUMED_YEAR or current year)")
    p.add_argument("--phrase", help="Header phrase identifying the tracked disruption (default: ALERTS_HEADER_PHRASE)")
    p.add_argument("--output", help="Where to write the HTML page (default: ALERTS_OUTPUT_PATH)")
    p.add_argument("--strategy", choices=["grammar", "dateutil"], help="Active period strategy for this run")
    p.add_argument("--strict", action="store_true", help="Fail on malformed date/time tokens instead of passing text through")
    p.add_argument("--require-route-match", action="store_true", help="Also require the route sort-order tag")

    args = p.parse_args(argv)

    configure_logging_if_needed()
    cfg = apply_overrides(load_config(), args)
    if not cfg.header_phrase:
        p.error("a header phrase is required (--phrase or ALERTS_HEADER_PHRASE)")

    init_db()
    db: Session = SessionLocal()
    run_id = uuid.uuid4()

    job = JobRun(
        run_id=run_id,
        job_name=f"monitor_{args.source}",
        status="running",
        meta={"args": vars(args)},
    )
    db.add(job)
    db.commit()

    try:
        source = SOURCES[args.source]()
        result = run_monitor(db, source, cfg)

        job = db.get(JobRun, run_id)
        job.status = "success"
        job.ended_at = datetime.utcnow()
        job.meta = {**(job.meta or {}), **result}
        db.commit()

        print(result)

    except Exception as e:
        db.rollback()
        job = db.get(JobRun, run_id)
        job.status = "fail"
        job.ended_at = datetime.utcnow()
        job.meta = {**(job.meta or {}), "error": repr(e)}
        db.commit()
        raise

    finally:
        db.close()

if __name__ == "__main__":
    main()
