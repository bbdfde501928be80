"""
Severity normalisation.
Every record leaves the formatter with a (level, levelname) pair on the syslog
scale: 0 is fatal, 7 is debug.
"""
import math
from typing import Tuple

from .values import is_finite_number

# ---------------------------------------------------------------------------
# Severity tables
# ---------------------------------------------------------------------------

DEFAULT_LEVEL = 6
DEFAULT_LEVELNAME = "info"

# Canonical name for each numeric level
LEVEL_NAMES = {
    0: "fatal",
    1: "alert",
    2: "critical",
    3: "error",
    4: "warn",
    5: "notice",
    6: "info",
    7: "debug",
}

# Accepted spellings (lower-case) → numeric level
LEVEL_ALIASES = {
    "fatal": 0, "emerg": 0, "emergency": 0,
    "alert": 1,
    "crit": 2, "critical": 2,
    "err": 3, "eror": 3, "error": 3,
    "warn": 4, "warning": 4,
    "notice": 5,
    "info": 6, "information": 6, "informational": 6,
    "dbug": 7, "debug": 7, "trace": 7,
}


def normalise_level_pair(value) -> Tuple[int, str]:
    """
    Map any severity encoding onto the (level, levelname) pair.

    Numbers are floored and must land on 0-7; the name is the canonical one.
    Strings are trimmed and lower-cased; a known alias keeps its own spelling
    as the name ("warning" stays "warning" at level 4).
    Anything else is (6, "info").
    """
    if is_finite_number(value):
        level = math.floor(value)
        if level in LEVEL_NAMES:
            return level, LEVEL_NAMES[level]

    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in LEVEL_ALIASES:
            return LEVEL_ALIASES[lowered], lowered

    return DEFAULT_LEVEL, DEFAULT_LEVELNAME


def apply_level_pair(target: dict, value) -> None:
    """Overwrite both severity fields of ``target`` from one raw value."""
    target["level"], target["levelname"] = normalise_level_pair(value)
