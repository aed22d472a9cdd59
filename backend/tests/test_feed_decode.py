"""Tests for decoding the alert feed into RawAlert values."""

from alertwatch.jobs.monitor.sources.mta.decode import decode_feed, entity_to_alert, pick_translation

from conftest import PHRASE, make_entity


class TestDecodeFeed:
    def test_decodes_alert_entities(self, feed_payload):
        alerts = decode_feed(feed_payload)

        assert [a.id for a in alerts] == [
            "lmm:planned_work:1001",
            "lmm:planned_work:1002",
            "lmm:planned_work:2001",
        ]
        first = alerts[0]
        assert first.header_text == PHRASE
        assert first.raw_active_period == "Sat 12:15 AM to Mon 5:00 AM, Feb 22 - Mar 17"
        assert first.sort_orders == ("MTASBWY:7:20",)
        assert first.route_ids == ("7",)

    def test_missing_entity_list(self):
        assert decode_feed({"header": {}}) == []
        assert decode_feed({"entity": None}) == []

    def test_alert_without_active_period(self):
        ra = entity_to_alert(make_entity("x", "Header only"))

        assert ra.header_text == "Header only"
        assert ra.raw_active_period is None

    def test_non_alert_entity_is_skipped(self):
        assert entity_to_alert({"id": "t1", "trip_update": {}}) is None


class TestPickTranslation:
    def test_prefers_requested_language(self):
        translated = {
            "translation": [
                {"language": "en-html", "text": "<p>Header</p>"},
                {"language": "en", "text": "Header"},
            ]
        }

        assert pick_translation(translated, "en") == "Header"

    def test_no_match(self):
        assert pick_translation({"translation": [{"language": "es", "text": "Hola"}]}, "en") is None
        assert pick_translation(None, "en") is None
