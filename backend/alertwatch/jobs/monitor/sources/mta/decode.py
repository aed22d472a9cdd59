import logging
from typing import Optional

from alertwatch.jobs.monitor.types import RawAlert

logger = logging.getLogger(__name__)

MERCURY_ALERT = "transit_realtime.mercury_alert"
MERCURY_SELECTOR = "transit_realtime.mercury_entity_selector"


def as_list(x):
    if x is None:
        return []
    return x if isinstance(x, list) else [x]


def pick_translation(translated: Optional[dict], language: str) -> Optional[str]:
    """First translation in the requested language, e.g. {"translation": [{"language": "en", "text": ...}]}."""
    for t in as_list((translated or {}).get("translation")):
        if (t or {}).get("language") == language:
            return t.get("text")
    return None


def entity_to_alert(entity: dict, *, language: str = "en") -> Optional[RawAlert]:
    alert = entity.get("alert")
    if not alert:
        return None

    mercury = alert.get(MERCURY_ALERT, {}) or {}

    sort_orders: list[str] = []
    route_ids: list[str] = []
    for informed in as_list(alert.get("informed_entity")):
        informed = informed or {}
        sort_order = (informed.get(MERCURY_SELECTOR, {}) or {}).get("sort_order")
        if sort_order:
            sort_orders.append(sort_order)
        if informed.get("route_id"):
            route_ids.append(informed["route_id"])

    return RawAlert(
        id=str(entity.get("id") or ""),
        header_text=pick_translation(alert.get("header_text"), language),
        raw_active_period=pick_translation(mercury.get("human_readable_active_period"), language),
        sort_orders=tuple(sort_orders),
        route_ids=tuple(route_ids),
    )


def decode_feed(payload: dict, *, language: str = "en") -> list[RawAlert]:
    entities = (payload or {}).get("entity")
    if not isinstance(entities, list):
        logger.warning("Feed payload has no entity list; treating as empty")
        return []

    alerts: list[RawAlert] = []
    skipped = 0
    for entity in entities:
        ra = entity_to_alert(entity or {}, language=language)
        if ra is None:
            skipped += 1
            continue
        alerts.append(ra)

    logger.info("Decoded %d alerts from %d entities (skipped=%d)", len(alerts), len(entities), skipped)
    return alerts
