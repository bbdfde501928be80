"""
Unit tests for the Graylog and Loki post-processors
"""

from decimal import Decimal

import pytest

from record_formatter.formatters import (
    as_fixed_point,
    grafana_loki_formatting,
    graylog_formatting,
    standard_record_formatting,
)


@pytest.fixture
def canonical_record(access_log_record):
    _, _, record = standard_record_formatting("svc.test", 1800000000, access_log_record)
    return record


# ---------------------------------------------------------------------------
# Graylog
# ---------------------------------------------------------------------------


class TestGraylogFormatting:
    def test_short_message_defaults_to_message(self, canonical_record):
        emit, ts, out = graylog_formatting("graylog_fmt.svc", 0, canonical_record)

        assert emit is True
        assert out["short_message"] == canonical_record["message"]
        assert ts == out["timestamp"] == Decimal("1755230259.000000000")

    def test_empty_message_defaults(self):
        _, _, out = graylog_formatting("t", 1700000000, {"message": "", "short_message": ""})
        assert out["message"] == "NO MESSAGE"
        assert out["short_message"] == "NO MESSAGE"

    def test_non_string_message_defaults(self):
        _, _, out = graylog_formatting("t", 1700000000, {"message": None})
        assert out["message"] == "NO MESSAGE"

    def test_whitespace_message_kept(self):
        _, _, out = graylog_formatting("t", 1700000000, {"message": "  ", "short_message": " "})
        assert out["message"] == "  "
        assert out["short_message"] == " "

    def test_existing_short_message_kept(self):
        _, _, out = graylog_formatting("t", 1700000000, {"message": "long", "short_message": "short"})
        assert out["short_message"] == "short"

    def test_iso_timestamp_converted(self):
        _, ts, out = graylog_formatting("t", 1, {"message": "m", "timestamp": "2025-08-15T03:57:39Z"})
        assert ts == out["timestamp"] == Decimal("1755230259")

    def test_missing_timestamp_uses_emitted_one(self):
        _, ts, out = graylog_formatting("t", 1700000000.5, {"message": "m"})
        assert ts == out["timestamp"] == 1700000000.5

    def test_unparseable_timestamp_uses_emitted_one(self):
        _, ts, out = graylog_formatting("t", 1700000000, {"message": "m", "timestamp": "soon"})
        assert as_fixed_point(out["timestamp"]) == "1700000000.000000000"

    def test_other_fields_pass_through(self, canonical_record):
        _, _, out = graylog_formatting("t", 0, canonical_record)
        for key, value in canonical_record.items():
            assert out[key] == value

    def test_input_not_modified(self, canonical_record):
        before = dict(canonical_record)
        graylog_formatting("t", 0, canonical_record)
        assert canonical_record == before

    def test_idempotent(self, canonical_record):
        _, ts, once = graylog_formatting("t", 0, canonical_record)
        _, ts_twice, twice = graylog_formatting("t", 0, once)
        assert twice == once
        assert ts_twice == ts


# ---------------------------------------------------------------------------
# Loki
# ---------------------------------------------------------------------------


class TestLokiFormatting:
    def test_record_timestamp_becomes_emitted_timestamp(self):
        emit, ts, out = grafana_loki_formatting("loki_fmt.svc", 1, {"timestamp": 1700000000})
        assert emit is True
        assert as_fixed_point(ts) == "1700000000.000000000"
        assert out["timestamp"] == ts

    def test_fraction_padded(self):
        _, ts, _ = grafana_loki_formatting("t", 1, {"timestamp": 1700000000.25})
        assert as_fixed_point(ts) == "1700000000.250000000"

    @pytest.mark.parametrize("value", [0, -1, 32503680000, "2025-08-15T03:57:39Z", None])
    def test_invalid_record_timestamp_keeps_emitted_one(self, value):
        _, ts, out = grafana_loki_formatting("t", 1700000000, {"timestamp": value})
        assert ts == 1700000000
        assert out["timestamp"] == value

    def test_missing_timestamp(self):
        _, ts, out = grafana_loki_formatting("t", 1700000000, {"message": "m"})
        assert ts == 1700000000
        assert "timestamp" not in out

    def test_idempotent(self, canonical_record):
        _, ts, once = grafana_loki_formatting("t", 0, canonical_record)
        _, ts_twice, twice = grafana_loki_formatting("t", 0, once)
        assert twice == once == canonical_record
        assert ts_twice == ts == canonical_record["timestamp"]
