import os
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class MonitorConfig:
    route_sort_order: str
    header_phrase: str
    require_route_match: bool

    assumed_year: int
    period_strategy: str
    strict: bool

    output_path: str
    page_title: str


def load_config() -> MonitorConfig:
    return MonitorConfig(
        route_sort_order=os.getenv("ALERTS_ROUTE_SORT_ORDER", "MTASBWY:7:20"),
        header_phrase=os.getenv("ALERTS_HEADER_PHRASE", ""),
        require_route_match=os.getenv("ALERTS_REQUIRE_ROUTE_MATCH", "0") == "1",
        assumed_year=int(os.getenv("ALERTS_ASSUMED_YEAR", str(date.today().year))),
        period_strategy=os.getenv("ALERTS_PERIOD_STRATEGY", "grammar"),
        strict=os.getenv("ALERTS_STRICT", "0") == "1",
        output_path=os.getenv("ALERTS_OUTPUT_PATH", "alerts.html"),
        page_title=os.getenv("ALERTS_PAGE_TITLE", "Service alerts"),
    )
