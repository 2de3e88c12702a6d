"""Tests for counter window predicates."""

from datetime import datetime

from buildstamp.core.windows import (
    WINDOWS,
    same_day,
    same_iso_week,
    same_month,
    same_year,
)


class TestPredicates:
    """Tests for the same-window predicates."""

    def test_same_day_ignores_time(self) -> None:
        assert same_day(datetime(2025, 3, 7, 23, 59), datetime(2025, 3, 7, 0, 1))
        assert not same_day(datetime(2025, 3, 8, 0, 0), datetime(2025, 3, 7, 23, 59))

    def test_iso_week_spans_year_boundary(self) -> None:
        """Mon 2024-12-30 and Wed 2025-01-01 are both in ISO week 2025-W01."""
        assert same_iso_week(datetime(2025, 1, 1), datetime(2024, 12, 30))

    def test_iso_week_sunday_belongs_to_previous_week(self) -> None:
        assert not same_iso_week(datetime(2024, 12, 30), datetime(2024, 12, 29))

    def test_iso_week_same_weekday_a_year_apart(self) -> None:
        assert not same_iso_week(datetime(2025, 3, 3), datetime(2024, 3, 4))

    def test_same_month(self) -> None:
        assert same_month(datetime(2025, 3, 31), datetime(2025, 3, 1))
        assert not same_month(datetime(2025, 3, 1), datetime(2024, 3, 1))

    def test_same_year(self) -> None:
        assert same_year(datetime(2025, 12, 31), datetime(2025, 1, 1))
        assert not same_year(datetime(2025, 1, 1), datetime(2024, 12, 31))


class TestWindowTable:
    """Tests for the window policy table."""

    def test_covers_every_counter(self) -> None:
        assert [w.field for w in WINDOWS] == [
            "builds_today",
            "builds_this_week",
            "builds_this_month",
            "builds_this_year",
            "builds_all_time",
        ]

    def test_all_time_never_resets(self) -> None:
        window = WINDOWS[-1]
        assert window.name == "all_time"
        assert window.same_window(datetime(2030, 1, 1), datetime(2000, 1, 1))
