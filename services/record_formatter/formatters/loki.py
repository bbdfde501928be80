"""
Grafana Loki post-processing of an already standard-formatted record.
Loki orders entries by the emitted timestamp, so it is taken from the record
with nanosecond precision whenever the record carries a valid epoch value.
"""
from .base import FilterResult
from .timestamps import MAX_EPOCH_SECONDS, to_unix_timestamp
from .values import is_finite_number


def grafana_loki_formatting(tag, timestamp, record: dict) -> FilterResult:
    new_record = dict(record)

    record_timestamp = new_record.get("timestamp")
    if is_finite_number(record_timestamp) and 0 < record_timestamp < MAX_EPOCH_SECONDS:
        timestamp = to_unix_timestamp(record_timestamp)
        new_record["timestamp"] = timestamp

    return FilterResult(True, timestamp, new_record)
