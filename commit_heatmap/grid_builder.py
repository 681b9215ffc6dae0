"""
Lay out a year's day counts as a week-by-weekday grid.

Columns are weeks, rows are weekdays. The first and last weeks are padded
with empty cells so every week has seven cells.
"""

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Iterator, Mapping, Optional

from commit_heatmap.intensity import DEFAULT_THRESHOLDS, IntensityLevel, bucket


@dataclass(frozen=True)
class GridCell:
    """
    One (week, weekday) position in the heatmap.

    Padding cells outside the target year have date None, count 0 and
    level NONE.
    """

    week_index: int
    weekday_index: int
    date: Optional[date]
    count: int
    level: IntensityLevel

    @property
    def in_year(self) -> bool:
        return self.date is not None


@dataclass(frozen=True)
class HeatmapGrid:
    """A full year of cells, one tuple of seven cells per week."""

    year: int
    week_start: int
    weeks: tuple[tuple[GridCell, ...], ...]

    def cells(self) -> Iterator[GridCell]:
        for week in self.weeks:
            yield from week

    def month_starts(self) -> list[tuple[int, int]]:
        """
        Find the weeks in which each month of the year begins.

        Returns:
            List of (week_index, month) pairs in calendar order
        """
        return [
            (cell.week_index, cell.date.month)
            for cell in self.cells()
            if cell.in_year and cell.date.day == 1
        ]

    def month_boundaries(self) -> set[int]:
        """
        Weeks whose first in-year day belongs to a different month than the
        previous week's first in-year day.
        """
        boundaries = set()
        previous_month = None
        for week in self.weeks:
            first = next((cell for cell in week if cell.in_year), None)
            if first is None:
                continue
            if previous_month is not None and first.date.month != previous_month:
                boundaries.add(first.week_index)
            previous_month = first.date.month
        return boundaries


def leading_padding(year: int, week_start: int = calendar.SUNDAY) -> int:
    """Number of padding cells before Jan 1 in the first week."""
    return (date(year, 1, 1).weekday() - week_start) % 7


def week_count(year: int, week_start: int = calendar.SUNDAY) -> int:
    """Number of weeks needed to cover Jan 1 to Dec 31 of year."""
    days = 366 if calendar.isleap(year) else 365
    return (leading_padding(year, week_start) + days + 6) // 7


def build_grid(
    day_counts: Mapping[date, int],
    year: int,
    week_start: int = calendar.SUNDAY,
    thresholds: Optional[tuple[int, ...]] = None,
) -> HeatmapGrid:
    """
    Build the heatmap grid for a year.

    Args:
        day_counts: Commit count per date (from calculate_day_counts)
        year: Target calendar year
        week_start: First weekday of each column (calendar.SUNDAY or
            calendar.MONDAY)
        thresholds: Intensity thresholds (default: DEFAULT_THRESHOLDS)

    Returns:
        HeatmapGrid whose weeks run from the week containing Jan 1 to the
        week containing Dec 31
    """
    if thresholds is None:
        thresholds = DEFAULT_THRESHOLDS

    # Work in ordinals: padding around years 1 and 9999 is not a valid date
    first = date(year, 1, 1).toordinal()
    last = date(year, 12, 31).toordinal()
    start = first - leading_padding(year, week_start)

    weeks = []
    for week_index in range(week_count(year, week_start)):
        week = []
        for weekday_index in range(7):
            ordinal = start + week_index * 7 + weekday_index
            if first <= ordinal <= last:
                day = date.fromordinal(ordinal)
                count = day_counts.get(day, 0)
                cell = GridCell(week_index, weekday_index, day, count, bucket(count, thresholds))
            else:
                cell = GridCell(week_index, weekday_index, None, 0, IntensityLevel.NONE)
            week.append(cell)
        weeks.append(tuple(week))

    return HeatmapGrid(year=year, week_start=week_start, weeks=tuple(weeks))
