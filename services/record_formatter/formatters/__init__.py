"""
Formatter package.
Pure per-record filters: the standard formatter that builds the canonical
record and the sink-specific post-processors that run after it.
"""

from .base import FilterResult
from .graylog import graylog_formatting
from .levels import normalise_level_pair
from .logfmt import render as render_logfmt
from .loki import grafana_loki_formatting
from .standard import standard_record_formatting
from .timestamps import as_fixed_point, to_unix_timestamp

# Filter name (as referenced by pipeline configuration) → callable
FILTERS = {
    "standard_record_formatting": standard_record_formatting,
    "graylog_formatting": graylog_formatting,
    "grafana_loki_formatting": grafana_loki_formatting,
}

__all__ = [
    "FILTERS",
    "FilterResult",
    "standard_record_formatting",
    "graylog_formatting",
    "grafana_loki_formatting",
    "normalise_level_pair",
    "to_unix_timestamp",
    "as_fixed_point",
    "render_logfmt",
]
