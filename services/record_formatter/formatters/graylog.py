"""
Graylog (GELF) post-processing of an already standard-formatted record.
GELF needs a non-empty short_message and a numeric timestamp.
"""
from .base import FilterResult, is_blank
from .standard import NO_MESSAGE
from .timestamps import normalise_or_default


def graylog_formatting(tag, timestamp, record: dict) -> FilterResult:
    new_record = dict(record)

    message = new_record.get("message")
    if is_blank(message):
        message = NO_MESSAGE
        new_record["message"] = message

    short_message = new_record.get("short_message")
    if is_blank(short_message):
        new_record["short_message"] = message

    if new_record.get("timestamp") is not None:
        timestamp = normalise_or_default(new_record["timestamp"], timestamp)
    new_record["timestamp"] = timestamp

    return FilterResult(True, timestamp, new_record)
