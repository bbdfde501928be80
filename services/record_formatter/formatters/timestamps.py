"""
Timestamp normalisation to epoch seconds with nanosecond precision.
Results are Decimal so the nine fractional digits survive exactly.
"""
import calendar
import re
from datetime import datetime
from decimal import ROUND_DOWN, Decimal, InvalidOperation
from typing import Optional

from .values import is_number

# Anything at or past Jan 1, 3000 is not an epoch-seconds value
MAX_EPOCH_SECONDS = 32503680000

NANOSECOND = Decimal("0.000000001")


def as_fixed_point(value) -> str:
    """seconds.fffffffff text of a normalised timestamp (str() may use exponent form, e.g. 0E-9)"""
    return format(value, "f")


_ISO8601_UTC_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})"        # date
    r"T(\d{2}):(\d{2}):(\d{2})"        # time
    r"(?:\.(\d+))?"                    # optional fractional seconds
    r"Z",                              # UTC designator is mandatory
    re.ASCII,
)


def _with_nanoseconds(value) -> Decimal:
    # repr() is the shortest exact decimal text for a float
    text = repr(value) if isinstance(value, float) else str(value)
    return Decimal(text).quantize(NANOSECOND, rounding=ROUND_DOWN)


def _parse_iso8601(text: str) -> Optional[Decimal]:
    m = _ISO8601_UTC_RE.fullmatch(text)
    if not m:
        return None

    year, month, day, hour, minute, second = (int(g) for g in m.groups()[:6])
    # A leap second (:60) is allowed and rolls over into the next minute
    try:
        datetime(year, month, day, hour, minute, min(second, 59))
    except ValueError:
        return None
    if second > 60:
        return None

    epoch = calendar.timegm((year, month, day, hour, minute, second))
    nanos = (m.group(7) or "")[:9].ljust(9, "0")
    return Decimal(epoch) + Decimal("0." + nanos)


def to_unix_timestamp(value):
    """
    Normalise a record timestamp.

    Args:
        value: epoch seconds (int/float/Decimal) or an ISO 8601 UTC string
               such as "2025-08-15T03:57:39.123Z"

    Returns:
        Decimal quantized to nine fractional digits (render it with
        as_fixed_point, not str()); numbers outside the
        sanity range come back unchanged; None when the value cannot be
        read as a timestamp.
    """
    if is_number(value):
        try:
            if 0 < value < MAX_EPOCH_SECONDS:
                return _with_nanoseconds(value)
        except InvalidOperation:
            pass
        return value

    if isinstance(value, str):
        return _parse_iso8601(value)

    return None


def normalise_or_default(value, default):
    """Normalise ``value``; fall back to ``default`` (normalised if possible)."""
    normalised = to_unix_timestamp(value)
    if normalised is not None:
        return normalised
    fallback = to_unix_timestamp(default)
    return default if fallback is None else fallback
