import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from alertwatch.core.db import Base
from alertwatch.jobs.monitor.config import MonitorConfig
from alertwatch.jobs.monitor.sources.mta.config import MtaConfig
from alertwatch.models import alert_snapshots, job_runs  # noqa: F401

PHRASE = "No [7] trains between 34 St-Hudson Yards and Queensboro Plaza"


def _translated(text, language="en"):
    return {"translation": [{"language": language, "text": text}]}


def make_entity(alert_id, header, period=None, sort_order="MTASBWY:7:20", route_id="7"):
    alert = {
        "header_text": _translated(header),
        "informed_entity": [
            {
                "agency_id": "MTASBWY",
                "route_id": route_id,
                "transit_realtime.mercury_entity_selector": {"sort_order": sort_order},
            }
        ],
    }
    if period is not None:
        alert["transit_realtime.mercury_alert"] = {
            "alert_type": "Planned - Part Suspended",
            "human_readable_active_period": _translated(period),
        }
    return {"id": alert_id, "alert": alert}


@pytest.fixture
def feed_payload() -> dict:
    return {
        "header": {"gtfs_realtime_version": "1.0", "timestamp": 1740000000},
        "entity": [
            make_entity(
                "lmm:planned_work:1001",
                PHRASE,
                "Sat 12:15 AM to Mon 5:00 AM, Feb 22 - Mar 17",
            ),
            make_entity(
                "lmm:planned_work:1002",
                PHRASE,
                "Feb 25 and Mar 4, Tuesdays, 12:45 AM to 5:00 AM",
            ),
            make_entity(
                "lmm:planned_work:2001",
                "Northbound [A] trains skip 50 St",
                "Weekdays, 9:45 PM to 5:00 AM, Feb 24 - 28",
                sort_order="MTASBWY:A:1",
                route_id="A",
            ),
            {"id": "trip_update_only", "trip_update": {}},
        ],
    }


@pytest.fixture
def monitor_config(tmp_path) -> MonitorConfig:
    return MonitorConfig(
        route_sort_order="MTASBWY:7:20",
        header_phrase=PHRASE,
        require_route_match=False,
        assumed_year=2025,
        period_strategy="grammar",
        strict=False,
        output_path=str(tmp_path / "out" / "alerts.html"),
        page_title="7 train closures",
    )


@pytest.fixture
def mta_config() -> MtaConfig:
    return MtaConfig(
        feed_url="https://feed.example/alerts.json",
        api_key=None,
        language="en",
        connect_timeout=1.0,
        read_timeout=1.0,
        retries=3,
        backoff_base=0.0,
    )


@pytest.fixture
def db_session():
    # one shared connection so TestClient worker threads see the same in-memory database
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    db = Session()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()
