"""Log record formatter: normalises every shipped record into one canonical flat shape"""

from .formatters import (
    FILTERS,
    FilterResult,
    grafana_loki_formatting,
    graylog_formatting,
    standard_record_formatting,
)

__all__ = [
    "FILTERS",
    "FilterResult",
    "standard_record_formatting",
    "graylog_formatting",
    "grafana_loki_formatting",
]
