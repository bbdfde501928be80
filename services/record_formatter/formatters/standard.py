"""
Standard record formatting.
Turns any ingested record into the canonical flat record every sink receives:
a string message, source, service_name, a nanosecond epoch timestamp and a
(level, levelname) severity pair. A record is never dropped.
"""
import logging

from .base import FilterResult, is_blank
from .fields import set_kv
from .flatten import flatten_into, write_leaf
from .levels import apply_level_pair
from .logfmt import render, to_logfmt_value
from .timestamps import normalise_or_default
from .values import children, decode_json, is_structured

logger = logging.getLogger(__name__)

NO_MESSAGE = "NO MESSAGE"
UNKNOWN_SOURCE = "unknown"
SOURCE_PREFIX = "source."


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------

def _decode_inline_json(record: dict) -> dict:
    """Splice the members of JSON-encoded string fields into the record."""
    decoded = {}
    for key, value in record.items():
        parsed = decode_json(value) if isinstance(value, str) else None
        if parsed is None:
            decoded[key] = value
            continue
        logger.debug("Decoded inline JSON field", extra={'field': key})
        # Later fields win; collisions here are not conflict-aware
        for member_key, member in children(parsed):
            decoded[member_key] = member
    return decoded


def _alias_log_to_message(decoded: dict) -> None:
    message = decoded.get("message")
    log = decoded.get("log")
    if (message is None or message == "") and isinstance(log, str) and log != "":
        decoded["message"] = decoded.pop("log")


def _materialise_message(decoded: dict, flat_record: dict) -> None:
    """Move the message out of ``decoded`` and into ``flat_record`` as a string."""
    if "message" not in decoded:
        flat_record["message"] = NO_MESSAGE
        return

    message = decoded.pop("message")
    if is_structured(message):
        # Direct scalars first so they claim their base keys
        for key, value in children(message):
            if not is_structured(value):
                write_leaf(flat_record, key, value)
        # Nested values next, without a "message." prefix
        for key, value in children(message):
            if is_structured(value):
                flatten_into(flat_record, value, key)
        flat_record["message"] = render(message)
    elif isinstance(message, str):
        flat_record["message"] = message
    else:
        flat_record["message"] = to_logfmt_value(message)


def _rewrite_source_keys(flat_record: dict) -> dict:
    """Rename "source.<x>" keys to "source_<x>" without clobbering existing values."""
    new_record = {}
    dotted = []
    for key, value in flat_record.items():
        if key.startswith(SOURCE_PREFIX):
            dotted.append((key, value))
        else:
            new_record[key] = value
    for key, value in dotted:
        set_kv(new_record, "source_" + key[len(SOURCE_PREFIX):], value)
    return new_record


def _apply_defaults(record: dict, tag) -> None:
    if record.get("short_message") == "":
        del record["short_message"]

    if is_blank(record.get("source")):
        record["source"] = tag if isinstance(tag, str) and tag != "" else UNKNOWN_SOURCE

    if is_blank(record.get("service_name")):
        source_service = record.get("source_service")
        if not is_blank(source_service):
            record["service_name"] = source_service
        else:
            record["service_name"] = record["source"]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def standard_record_formatting(tag, timestamp, record: dict) -> FilterResult:
    """
    Produce the canonical flat record.

    Args:
        tag: routing tag of the record (used as the default source)
        timestamp: ingest timestamp, used when the record has no usable one
        record: the raw record; it is not modified

    Returns:
        FilterResult(emit=True, timestamp, canonical_record)
    """
    decoded = _decode_inline_json(record)
    _alias_log_to_message(decoded)

    flat_record = {}
    _materialise_message(decoded, flat_record)
    flatten_into(flat_record, decoded)

    new_record = _rewrite_source_keys(flat_record)
    _apply_defaults(new_record, tag)

    new_record["timestamp"] = normalise_or_default(new_record.get("timestamp"), timestamp)

    severity = new_record["level"] if "level" in new_record else new_record.get("levelname")
    apply_level_pair(new_record, severity)

    return FilterResult(True, new_record["timestamp"], new_record)
