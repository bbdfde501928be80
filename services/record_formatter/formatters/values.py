"""
Helpers over the dynamically shaped values found in log records.
A record value is JSON-like: null, bool, number, str, list or dict.
Dicts keep insertion order and every traversal here follows it.
"""
import json
import math
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

Value = Union[None, bool, int, float, Decimal, str, List[Any], Dict[str, Any]]


def is_number(value: Any) -> bool:
    # bool is an int subclass but never a number in a log record
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def is_finite_number(value: Any) -> bool:
    if not is_number(value):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    return math.isfinite(value)


def is_structured(value: Any) -> bool:
    return isinstance(value, (dict, list))


def children(value: Value) -> Iterator[Tuple[str, Value]]:
    """Yield (key, child) pairs; list items are keyed by 1-based index."""
    if isinstance(value, dict):
        for key, child in value.items():
            yield str(key), child
    elif isinstance(value, list):
        for index, child in enumerate(value, start=1):
            yield str(index), child


def as_text(value: Value) -> str:
    """Text form used when comparing two values for equality."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant {name}")


def decode_json(text: str) -> Optional[Union[Dict[str, Any], List[Any]]]:
    """
    Best-effort strict JSON decode of a string field.

    Returns:
        The decoded dict or list, or None when the text is not JSON or
        decodes to a scalar.
    """
    try:
        decoded = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, TypeError, RecursionError):
        return None
    if is_structured(decoded):
        return decoded
    return None
