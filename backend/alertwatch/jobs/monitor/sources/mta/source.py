import logging
from typing import Optional

import httpx

from alertwatch.jobs.monitor.sources.base import BaseFeedSource
from alertwatch.jobs.monitor.types import RawAlert

from .config import MtaConfig, load_config
from .decode import decode_feed
from .http import configure_logging_if_needed, get_with_retry, make_client, mask_api_key

logger = logging.getLogger(__name__)


class MtaAlertsSource(BaseFeedSource):
    """
    MTA GTFS-realtime service alerts (JSON flavour):
      - GET the camsys subway-alerts feed
      - decode every entity's alert into a RawAlert ("en" translations only)
    """

    def __init__(self, cfg: Optional[MtaConfig] = None, *, transport: Optional[httpx.BaseTransport] = None):
        configure_logging_if_needed()
        self.cfg = cfg or load_config()
        self.transport = transport

        logger.info(
            "MTA alerts configured feed_url=%s api_key=%s timeouts(connect=%.1f read=%.1f) retries=%d backoff_base=%.2f",
            self.cfg.feed_url,
            mask_api_key(self.cfg.api_key) or "none",
            self.cfg.connect_timeout,
            self.cfg.read_timeout,
            self.cfg.retries,
            self.cfg.backoff_base,
        )

    def fetch(self) -> list[RawAlert]:
        with make_client(self.cfg, transport=self.transport) as client:
            payload = get_with_retry(self.cfg, client, self.cfg.feed_url)
        return decode_feed(payload, language=self.cfg.language)
