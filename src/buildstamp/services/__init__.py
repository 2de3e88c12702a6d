"""Host-side services for buildstamp.

This package provides the I/O the core never performs itself:
- history: JSON build history acting as the previous-build chain
"""

from .history import HistoryError, HistoryStore

__all__ = [
    "HistoryError",
    "HistoryStore",
]
