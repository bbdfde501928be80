from typing import NamedTuple


class FilterResult(NamedTuple):
    """What every filter hands back to the shipping pipeline."""

    emit: bool
    timestamp: object
    record: dict


def is_blank(value) -> bool:
    """True when a field is missing, not a string, or the empty string."""
    return not isinstance(value, str) or value == ""
