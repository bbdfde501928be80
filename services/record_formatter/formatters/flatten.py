"""
Flatten nested record values into dotted keys.
Lists become key.1, key.2 ...; empty lists and dicts write nothing.
"""
from typing import Optional

from .fields import set_kv
from .levels import apply_level_pair
from .values import Value, children, is_structured

SEVERITY_KEYS = ("level", "levelname")


def write_leaf(target: dict, key: str, value) -> None:
    # Severity fields are always normalised as a pair and always overwrite
    if key in SEVERITY_KEYS:
        apply_level_pair(target, value)
    else:
        set_kv(target, key, value)


def flatten_into(target: dict, value: Value, parent_key: Optional[str] = None) -> None:
    """
    Flatten a dict or list into ``target``.

    Args:
        target: flat mapping receiving the leaves
        value: dict or list to walk
        parent_key: dotted prefix for every key written, or None at the root
    """
    for key, child in children(value):
        new_key = f"{parent_key}.{key}" if parent_key is not None else key
        if is_structured(child):
            flatten_into(target, child, new_key)
        else:
            write_leaf(target, new_key, child)
