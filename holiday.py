#!/usr/bin/env python3
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
import sys
from typing import Optional, Sequence, Tuple


class ThemeHoliday(str, Enum):
    halloween = "halloween"
    christmas = "christmas"
    lunar_new_year = "lunar_new_year"
    valentines = "valentines"
    pride = "pride"


@dataclass(frozen=True)
class HolidayRange:
    name: str
    start: Tuple[int, int]  # (month, day), inclusive
    end: Tuple[int, int]  # (month, day), inclusive

    def wraps_year(self) -> bool:
        return self.start[0] > self.end[0]

    def matches(self, month: int, day: int) -> bool:
        start_m, start_d = self.start
        end_m, end_d = self.end
        if month == start_m and day >= start_d:
            return True
        if month == end_m and day <= end_d:
            return True
        if self.wraps_year():
            # e.g. Nov -> Feb: Dec and Jan sit "between"
            return month > start_m or month < end_m
        return start_m < month < end_m


# Order matters: the first matching range wins.
HOLIDAY_RANGES: Tuple[HolidayRange, ...] = (
    HolidayRange(ThemeHoliday.halloween.value, (10, 25), (11, 1)),
    HolidayRange(ThemeHoliday.christmas.value, (12, 1), (12, 31)),
    HolidayRange(ThemeHoliday.lunar_new_year.value, (1, 20), (2, 20)),
    HolidayRange(ThemeHoliday.valentines.value, (2, 10), (2, 14)),
    HolidayRange(ThemeHoliday.pride.value, (6, 1), (6, 30)),
)


# -----------------------------
# Date helpers
# -----------------------------
def today_local() -> date:
    return date.today()


def parse_date_iso(date_iso: str) -> date:
    try:
        y, m, d = map(int, date_iso.split("-"))
        return date(y, m, d)
    except Exception:
        raise ValueError("date_iso must be in YYYY-MM-DD format")


# -----------------------------
# Lookup
# -----------------------------
def holiday_by_date(
    target: date, ranges: Sequence[HolidayRange] = HOLIDAY_RANGES
) -> Optional[str]:
    """
    Return the name of the first range in `ranges` covering `target`, else None.
    Only month and day are considered.
    """
    for rng in ranges:
        if rng.matches(target.month, target.day):
            return rng.name
    return None


def holiday_name_or_none(date_iso: str) -> Optional[str]:
    """
    Return the theme holiday for a given YYYY-MM-DD, or None if no range covers it.
    """
    return holiday_by_date(parse_date_iso(date_iso))


# -----------------------------
# CLI
# -----------------------------
def _main():
    if len(sys.argv) != 2:
        print("Usage: python3 holiday.py YYYY-MM-DD")
        sys.exit(2)
    try:
        name = holiday_name_or_none(sys.argv[1])
    except ValueError as e:
        print(str(e))
        sys.exit(2)
    if name is None:
        sys.exit(1)
    print(name)
    sys.exit(0)


if __name__ == "__main__":
    _main()
