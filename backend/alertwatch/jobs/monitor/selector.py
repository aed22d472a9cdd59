import logging
from typing import Iterable

from alertwatch.jobs.monitor.types import RawAlert, SelectedAlert

logger = logging.getLogger(__name__)


def select_alerts(
    alerts: Iterable[RawAlert],
    *,
    sort_order: str,
    header_phrase: str,
    require_route_match: bool = False,
) -> list[SelectedAlert]:
    """
    Keep alerts whose header contains header_phrase.

    The route check (sort_order among the informed entities) is always computed and
    carried on the result, but only gates inclusion when require_route_match is set.
    """
    selected: list[SelectedAlert] = []
    total = 0
    route_matches = 0
    header_matches = 0

    for ra in alerts:
        total += 1
        route_match = sort_order in ra.sort_orders
        header_match = bool(header_phrase) and header_phrase in (ra.header_text or "")

        route_matches += route_match
        header_matches += header_match
        logger.debug(
            "Alert %s route_match=%s header_match=%s sort_orders=%s",
            ra.id,
            route_match,
            header_match,
            list(ra.sort_orders),
        )

        if not header_match:
            continue
        if require_route_match and not route_match:
            continue
        selected.append(SelectedAlert(alert=ra, route_match=route_match, header_match=header_match))

    logger.info(
        "Selected %d/%d alerts (route_matches=%d header_matches=%d require_route_match=%s)",
        len(selected),
        total,
        route_matches,
        header_matches,
        require_route_match,
    )
    return selected
