"""
Render nested values as a single logfmt line (key=value key2=value2).
Used to keep a structured message greppable after it has been flattened.
"""
import re
from decimal import Decimal
from typing import List, Optional

from .values import children, is_number, is_structured

# Values made only of these characters are emitted without quotes
_SAFE_VALUE_RE = re.compile(r"[A-Za-z0-9._:/-]+")


def to_logfmt_value(value) -> str:
    """Render one scalar as a logfmt value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        if isinstance(value, float):
            return repr(value)
        # str() of a Decimal can switch to exponent form (0E-9)
        return format(value, "f") if isinstance(value, Decimal) else str(value)
    if isinstance(value, str):
        if _SAFE_VALUE_RE.fullmatch(value):
            return value
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return "null"


def table_to_logfmt(value, prefix: Optional[str] = None, parts: Optional[List[str]] = None) -> List[str]:
    """
    Collect ``key=value`` tokens for every leaf of a dict or list.

    List items are keyed by 1-based index (key.1, key.2 ...). Tokens are
    appended to ``parts`` in traversal order and the list is returned.
    """
    if parts is None:
        parts = []
    for key, child in children(value):
        full_key = f"{prefix}.{key}" if prefix is not None else key
        if is_structured(child):
            table_to_logfmt(child, full_key, parts)
        else:
            parts.append(f"{full_key}={to_logfmt_value(child)}")
    return parts


def render(value) -> str:
    """Render a dict/list as one logfmt line, or a scalar as its logfmt value."""
    if is_structured(value):
        return " ".join(table_to_logfmt(value))
    return to_logfmt_value(value)
