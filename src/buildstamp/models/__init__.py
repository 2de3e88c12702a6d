"""Pydantic data models for buildstamp.

This package defines the data structures shared by the resolver, the
expander and the history store:
- Build outcome severity (BuildResult)
- Resolved counters (BuildCounters)
- Per-field counter overrides (OverrideSpec)
- The build being stamped (BuildContext)
- Persisted build records (BuildRecord, BuildHistory)

Example:
    >>> from buildstamp.models import BuildCounters
    >>> BuildCounters(builds_today=3).model_dump_json()
"""

from .context import BuildContext
from .counters import COUNTER_FIELDS, BuildCounters
from .override import OverrideSpec, normalize_override, parse_non_negative
from .record import BuildHistory, BuildRecord
from .result import BuildResult

__all__ = [
    "COUNTER_FIELDS",
    "BuildContext",
    "BuildCounters",
    "BuildHistory",
    "BuildRecord",
    "BuildResult",
    "OverrideSpec",
    "normalize_override",
    "parse_non_negative",
]
