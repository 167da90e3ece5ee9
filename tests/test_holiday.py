"""Tests for the calendar holiday heuristic."""

from datetime import date

import pytest

from holiday import (
    HOLIDAY_RANGES,
    HolidayRange,
    ThemeHoliday,
    holiday_by_date,
    holiday_name_or_none,
)


class TestFixedTable:
    """Lookups against the built-in range table."""

    @pytest.mark.parametrize(
        "day, expected",
        [
            (date(2024, 12, 15), "christmas"),
            (date(2024, 10, 28), "halloween"),
            (date(2024, 1, 25), "lunar_new_year"),
            (date(2024, 6, 15), "pride"),
        ],
    )
    def test_inside_range(self, day, expected):
        """Dates strictly inside a range return its label."""
        assert holiday_by_date(day) == expected

    @pytest.mark.parametrize("day", [date(2024, 3, 1), date(2024, 7, 4), date(2024, 9, 30), date(2024, 1, 19)])
    def test_outside_every_range(self, day):
        """Dates outside every range give no match."""
        assert holiday_by_date(day) is None

    def test_halloween_boundaries_inclusive(self):
        """Both ends of a range are inclusive."""
        assert holiday_by_date(date(2024, 10, 25)) == "halloween"
        assert holiday_by_date(date(2024, 11, 1)) == "halloween"
        assert holiday_by_date(date(2024, 10, 24)) is None
        assert holiday_by_date(date(2024, 11, 2)) is None

    def test_christmas_boundaries(self):
        assert holiday_by_date(date(2024, 12, 1)) == "christmas"
        assert holiday_by_date(date(2024, 12, 31)) == "christmas"

    def test_valentines_boundaries_inclusive(self):
        """Valentines boundaries match when evaluated on their own."""
        valentines = [r for r in HOLIDAY_RANGES if r.name == "valentines"]
        assert holiday_by_date(date(2024, 2, 10), valentines) == "valentines"
        assert holiday_by_date(date(2024, 2, 14), valentines) == "valentines"

    def test_lunar_new_year_shadows_valentines(self):
        """lunar_new_year is declared first, so it wins in mid February."""
        assert holiday_by_date(date(2024, 2, 12)) == "lunar_new_year"

    def test_table_labels_are_enum_values(self):
        assert [r.name for r in HOLIDAY_RANGES] == [h.value for h in ThemeHoliday]


class TestCustomRanges:
    """Tie-break and year-wrapping behaviour."""

    def test_first_declared_range_wins(self):
        ranges = [
            HolidayRange("first", (3, 1), (3, 20)),
            HolidayRange("second", (3, 10), (3, 31)),
        ]
        assert holiday_by_date(date(2024, 3, 15), ranges) == "first"
        assert holiday_by_date(date(2024, 3, 15), list(reversed(ranges))) == "second"

    def test_month_strictly_between(self):
        ranges = [HolidayRange("summer", (6, 21), (9, 22))]
        assert holiday_by_date(date(2024, 7, 1), ranges) == "summer"
        assert holiday_by_date(date(2024, 8, 31), ranges) == "summer"
        assert holiday_by_date(date(2024, 10, 1), ranges) is None

    def test_range_wrapping_new_year(self):
        ranges = [HolidayRange("winter", (12, 20), (1, 5))]
        assert holiday_by_date(date(2024, 12, 25), ranges) == "winter"
        assert holiday_by_date(date(2025, 1, 3), ranges) == "winter"
        assert holiday_by_date(date(2025, 1, 6), ranges) is None
        assert holiday_by_date(date(2024, 12, 19), ranges) is None

    def test_long_wrapping_range_covers_middle_months(self):
        ranges = [HolidayRange("dark_season", (11, 20), (2, 5))]
        assert holiday_by_date(date(2024, 12, 1), ranges) == "dark_season"
        assert holiday_by_date(date(2025, 1, 15), ranges) == "dark_season"
        assert holiday_by_date(date(2025, 3, 1), ranges) is None
        assert holiday_by_date(date(2024, 10, 1), ranges) is None

    def test_empty_table(self):
        assert holiday_by_date(date(2024, 12, 25), []) is None


class TestIsoParsing:
    def test_iso_lookup(self):
        assert holiday_name_or_none("2024-12-10") == "christmas"
        assert holiday_name_or_none("2024-03-01") is None

    @pytest.mark.parametrize("bad", ["2024/12/10", "yesterday", "2024-13-01", ""])
    def test_invalid_iso(self, bad):
        with pytest.raises(ValueError):
            holiday_name_or_none(bad)
