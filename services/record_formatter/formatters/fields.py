"""
Conflict-aware field writes.

A value is only written over a missing or empty-string field. When the field
already holds a different value the new one cascades to ``<key>_extracted``,
then ``<key>_extracted2``, ``<key>_extracted3`` and so on. A slot holding the
same value (compared as text) ends the search without writing, so replaying a
record never duplicates data.
"""
from itertools import count
from typing import Iterator

from .values import as_text

EXTRACTED_SUFFIX = "_extracted"


def _slot_is_free(existing) -> bool:
    return isinstance(existing, str) and existing == ""


def candidate_keys(key: str) -> Iterator[str]:
    """key, key_extracted, key_extracted2, key_extracted3, ..."""
    yield key
    extracted = key + EXTRACTED_SUFFIX
    yield extracted
    for i in count(2):
        yield f"{extracted}{i}"


def set_kv(target: dict, key: str, value) -> str:
    """
    Write ``value`` into ``target`` without losing an existing different value.

    Returns:
        The key that now holds ``value`` (written or already present).
    """
    wanted = as_text(value)
    for slot in candidate_keys(key):
        if slot not in target or _slot_is_free(target[slot]):
            target[slot] = value
            return slot
        if as_text(target[slot]) == wanted:
            return slot
