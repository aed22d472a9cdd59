import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_FEED_URL = "https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/camsys%2Fsubway-alerts.json"


@dataclass(frozen=True)
class MtaConfig:
    feed_url: str
    api_key: Optional[str]
    language: str

    connect_timeout: float
    read_timeout: float

    retries: int
    backoff_base: float


def load_config() -> MtaConfig:
    return MtaConfig(
        feed_url=os.getenv("ALERTS_FEED_URL", DEFAULT_FEED_URL),
        api_key=os.getenv("ALERTS_API_KEY") or None,
        language=os.getenv("ALERTS_LANGUAGE", "en"),
        connect_timeout=float(os.getenv("ALERTS_CONNECT_TIMEOUT_SECONDS", "10")),
        read_timeout=float(os.getenv("ALERTS_READ_TIMEOUT_SECONDS", "30")),
        retries=max(1, int(os.getenv("ALERTS_RETRIES", "4"))),
        backoff_base=float(os.getenv("ALERTS_BACKOFF_BASE_SECONDS", "1.5")),
    )
