import logging
import os
import random
import time
from typing import Optional

import httpx

from .config import MtaConfig

logger = logging.getLogger(__name__)

RETRY_STATUSES = {429, 500, 502, 503, 504, 520, 522, 524}


def mask_api_key(value: Optional[str]) -> Optional[str]:
    if not value:
        return value
    if len(value) <= 6:
        return "****"
    return f"****{value[-4:]}"


def configure_logging_if_needed() -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def log_request(request: httpx.Request) -> None:
    logger.debug("HTTP %s %s", request.method, request.url)
    logger.debug("HTTP x-api-key: %s", mask_api_key(request.headers.get("x-api-key")))


def make_client(cfg: MtaConfig, *, transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    timeout = httpx.Timeout(cfg.read_timeout, connect=cfg.connect_timeout)
    headers = {"Accept": "application/json"}
    if cfg.api_key:
        headers["x-api-key"] = cfg.api_key
    return httpx.Client(
        timeout=timeout,
        headers=headers,
        event_hooks={"request": [log_request]},
        transport=transport,
    )


def sleep_backoff(cfg: MtaConfig, *, attempt: int, url: str) -> None:
    sleep_s = cfg.backoff_base * (2 ** (attempt - 1))
    sleep_s += random.uniform(0, 0.5)
    logger.info("Sleeping %.2fs before retrying %s", sleep_s, url)
    time.sleep(sleep_s)


def get_with_retry(cfg: MtaConfig, client: httpx.Client, url: str) -> dict:
    last_err: Exception | None = None

    for attempt in range(1, cfg.retries + 1):
        t0 = time.perf_counter()
        try:
            r = client.get(url)
            elapsed = time.perf_counter() - t0

            if r.status_code in RETRY_STATUSES:
                logger.warning(
                    "Retryable HTTP %d (attempt %d/%d) GET %s after %.2fs body_snippet=%r",
                    r.status_code,
                    attempt,
                    cfg.retries,
                    url,
                    elapsed,
                    (r.text or "")[:300],
                )
                raise httpx.HTTPStatusError("Retryable status", request=r.request, response=r)

            logger.debug("GET %s completed in %.2fs status=%d", url, elapsed, r.status_code)
            r.raise_for_status()
            return r.json()

        except httpx.TimeoutException as e:
            last_err = e
            logger.warning(
                "%s (attempt %d/%d) GET %s after %.2fs",
                e.__class__.__name__,
                attempt,
                cfg.retries,
                url,
                time.perf_counter() - t0,
            )

        except httpx.HTTPStatusError as e:
            last_err = e
            status = e.response.status_code if e.response is not None else None
            if status not in RETRY_STATUSES:
                logger.error("Non-retryable HTTP %s GET %s", status, url)
                raise

        except httpx.TransportError as e:
            last_err = e
            logger.warning("Request failed (attempt %d/%d) GET %s error=%r", attempt, cfg.retries, url, e)

        if attempt < cfg.retries:
            sleep_backoff(cfg, attempt=attempt, url=url)

    raise last_err  # type: ignore
