"""Core business logic for buildstamp.

This package contains pure logic with no external I/O:
- windows: Rolling counter windows (day, week, month, year, all time)
- resolver: Counter resolution and previous-build lookup
- date_format: SimpleDateFormat-style date patterns
- expander: Version template expansion
- stamp: Resolve and expand for one build
"""

from .date_format import DEFAULT_DATE_PATTERN, format_date
from .expander import expand, expand_environment
from .resolver import (
    BuildChain,
    BuildRef,
    Resolution,
    find_previous_build,
    iter_previous_builds,
    resolve,
)
from .stamp import StampResult, resolve_prefix, stamp_build
from .windows import WINDOWS, Window

__all__ = [
    "DEFAULT_DATE_PATTERN",
    "WINDOWS",
    "BuildChain",
    "BuildRef",
    "Resolution",
    "StampResult",
    "Window",
    "expand",
    "expand_environment",
    "find_previous_build",
    "format_date",
    "iter_previous_builds",
    "resolve",
    "resolve_prefix",
    "stamp_build",
]
