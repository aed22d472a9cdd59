"""Tests for environment-driven configuration."""

from datetime import date

import pytest

from alertwatch.jobs.monitor import config as monitor_config
from alertwatch.jobs.monitor.sources.mta import config as mta_config
from alertwatch.jobs.monitor.sources.mta.source import MtaAlertsSource

ENV_VARS = [
    "ALERTS_FEED_URL",
    "ALERTS_API_KEY",
    "ALERTS_LANGUAGE",
    "ALERTS_RETRIES",
    "ALERTS_ROUTE_SORT_ORDER",
    "ALERTS_HEADER_PHRASE",
    "ALERTS_ASSUMED_YEAR",
    "ALERTS_PERIOD_STRATEGY",
    "ALERTS_STRICT",
    "ALERTS_REQUIRE_ROUTE_MATCH",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestMonitorConfig:
    def test_defaults(self, clean_env):
        cfg = monitor_config.load_config()

        assert cfg.route_sort_order == "MTASBWY:7:20"
        assert cfg.header_phrase == ""
        assert cfg.assumed_year == date.today().year
        assert cfg.period_strategy == "grammar"
        assert cfg.strict is False
        assert cfg.require_route_match is False

    def test_overrides(self, clean_env):
        clean_env.setenv("ALERTS_ASSUMED_YEAR", "2025")
        clean_env.setenv("ALERTS_HEADER_PHRASE", "No [7] trains")
        clean_env.setenv("ALERTS_STRICT", "1")
        clean_env.setenv("ALERTS_REQUIRE_ROUTE_MATCH", "1")

        cfg = monitor_config.load_config()

        assert cfg.assumed_year == 2025
        assert cfg.header_phrase == "No [7] trains"
        assert cfg.strict is True
        assert cfg.require_route_match is True

    def test_bad_year(self, clean_env):
        clean_env.setenv("ALERTS_ASSUMED_YEAR", "next year")

        with pytest.raises(ValueError):
            monitor_config.load_config()


class TestMtaConfig:
    def test_defaults(self, clean_env):
        cfg = mta_config.load_config()

        assert cfg.feed_url == mta_config.DEFAULT_FEED_URL
        assert cfg.api_key is None
        assert cfg.language == "en"
        assert cfg.retries == 4

    def test_overrides(self, clean_env):
        clean_env.setenv("ALERTS_API_KEY", "secret-key-1234")
        clean_env.setenv("ALERTS_RETRIES", "0")

        cfg = mta_config.load_config()

        assert cfg.api_key == "secret-key-1234"
        assert cfg.retries == 1

    def test_source_loads_its_own_config(self, clean_env):
        clean_env.setenv("ALERTS_FEED_URL", "https://feed.example/alerts.json")

        assert MtaAlertsSource().cfg.feed_url == "https://feed.example/alerts.json"
