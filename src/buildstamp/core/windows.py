"""Rolling counter windows.

Each counter resets to 1 when the current build falls outside the window of
the previous build. Windows are described by a single table so a new window
only needs one more entry.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime


def same_day(current: datetime, prior: datetime) -> bool:
    return current.date() == prior.date()


def same_iso_week(current: datetime, prior: datetime) -> bool:
    # (ISO year, ISO week) so that Dec 31 and Jan 1 share week 1 when they should
    return current.isocalendar()[:2] == prior.isocalendar()[:2]


def same_month(current: datetime, prior: datetime) -> bool:
    return (current.year, current.month) == (prior.year, prior.month)


def same_year(current: datetime, prior: datetime) -> bool:
    return current.year == prior.year


def always(current: datetime, prior: datetime) -> bool:
    return True


@dataclass(frozen=True)
class Window:
    """Counter window policy.

    Attributes:
        name: Short window name used in logs.
        field: BuildCounters field holding the window's counter.
        same_window: Predicate telling whether two timestamps share the window.
    """

    name: str
    field: str
    same_window: Callable[[datetime, datetime], bool]


WINDOWS: tuple[Window, ...] = (
    Window("today", "builds_today", same_day),
    Window("week", "builds_this_week", same_iso_week),
    Window("month", "builds_this_month", same_month),
    Window("year", "builds_this_year", same_year),
    Window("all_time", "builds_all_time", always),
)
