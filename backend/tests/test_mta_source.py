"""Tests for fetching the alert feed over HTTP."""

import dataclasses
from unittest.mock import patch

import httpx
import pytest

from alertwatch.jobs.monitor.sources.mta.http import get_with_retry, make_client, mask_api_key
from alertwatch.jobs.monitor.sources.mta.source import MtaAlertsSource


def _transport(responses, seen=None):
    """MockTransport replaying the given responses (status, json) in order."""
    queue = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        status, body = item
        return httpx.Response(status, json=body)

    return httpx.MockTransport(handler)


class TestGetWithRetry:
    @patch("alertwatch.jobs.monitor.sources.mta.http.time.sleep")
    def test_retries_retryable_status(self, mock_sleep, mta_config):
        transport = _transport([(503, {"error": "busy"}), (200, {"entity": []})])

        with make_client(mta_config, transport=transport) as client:
            result = get_with_retry(mta_config, client, mta_config.feed_url)

        assert result == {"entity": []}
        assert mock_sleep.call_count == 1

    @patch("alertwatch.jobs.monitor.sources.mta.http.time.sleep")
    def test_retries_timeouts(self, mock_sleep, mta_config):
        transport = _transport([httpx.ReadTimeout("slow"), (200, {"entity": []})])

        with make_client(mta_config, transport=transport) as client:
            assert get_with_retry(mta_config, client, mta_config.feed_url) == {"entity": []}

    @patch("alertwatch.jobs.monitor.sources.mta.http.time.sleep")
    def test_non_retryable_status_raises_immediately(self, mock_sleep, mta_config):
        seen = []
        transport = _transport([(403, {"error": "forbidden"})], seen)

        with make_client(mta_config, transport=transport) as client:
            with pytest.raises(httpx.HTTPStatusError):
                get_with_retry(mta_config, client, mta_config.feed_url)

        assert len(seen) == 1
        mock_sleep.assert_not_called()

    @patch("alertwatch.jobs.monitor.sources.mta.http.time.sleep")
    def test_gives_up_after_retries(self, mock_sleep, mta_config):
        transport = _transport([(502, {}), (502, {}), (502, {})])

        with make_client(mta_config, transport=transport) as client:
            with pytest.raises(httpx.HTTPStatusError):
                get_with_retry(mta_config, client, mta_config.feed_url)

        assert mock_sleep.call_count == mta_config.retries - 1


class TestMakeClient:
    def test_sends_api_key_when_configured(self, mta_config):
        seen = []
        cfg = dataclasses.replace(mta_config, api_key="secret-key-1234")

        with make_client(cfg, transport=_transport([(200, {})], seen)) as client:
            client.get(cfg.feed_url)

        assert seen[0].headers["x-api-key"] == "secret-key-1234"

    def test_mask_api_key(self):
        assert mask_api_key("secret-key-1234") == "****1234"
        assert mask_api_key("abc") == "****"
        assert mask_api_key(None) is None


class TestMtaAlertsSource:
    def test_fetch_decodes_feed(self, mta_config, feed_payload):
        source = MtaAlertsSource(mta_config, transport=_transport([(200, feed_payload)]))

        alerts = source.fetch()

        assert len(alerts) == 3
        assert alerts[1].raw_active_period == "Feb 25 and Mar 4, Tuesdays, 12:45 AM to 5:00 AM"
