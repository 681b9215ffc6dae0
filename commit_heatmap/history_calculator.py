"""
History calculator for the commit activity heatmap.

Turns a stream of commit timestamps into per-day commit counts for one
calendar year.
"""

import logging
from datetime import date, datetime, tzinfo
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

logger = logging.getLogger(__name__)


def iter_year_dates(year: int) -> Iterator[date]:
    """Yield every date from Jan 1 to Dec 31 of year."""
    first = date(year, 1, 1).toordinal()
    last = date(year, 12, 31).toordinal()
    for ordinal in range(first, last + 1):
        yield date.fromordinal(ordinal)


def calculate_day_counts(
    timestamps: Iterable[datetime],
    year: int,
    tz: Optional[tzinfo] = None,
) -> Mapping[date, int]:
    """
    Count commits per local calendar day of one year.

    Args:
        timestamps: Timezone-aware commit timestamps, in any order
        year: Target calendar year
        tz: Timezone defining "local" days (default: the host's local zone)

    Returns:
        Read-only mapping with an entry for every date of the year; days
        without commits map to 0. Timestamps outside the year are ignored.
    """
    counts: dict[date, int] = {day: 0 for day in iter_year_dates(year)}

    seen = 0
    for timestamp in timestamps:
        seen += 1
        try:
            local_date = timestamp.astimezone(tz).date()
        except OverflowError:
            # Falls before year 1 or after year 9999, so never in the target year
            continue
        if local_date.year == year:
            counts[local_date] += 1

    logger.debug(
        "%d of %d commits fall in %d", sum(counts.values()), seen, year
    )
    return MappingProxyType(counts)
