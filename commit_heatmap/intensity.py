"""
Intensity levels for heatmap coloring.

Maps a day's commit count onto one of five ordered levels.
"""

import math
from bisect import bisect_right
from enum import IntEnum


class IntensityLevel(IntEnum):
    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    MAX = 4


# Minimum count for LOW, MEDIUM, HIGH and MAX respectively:
# 0 -> none, 1 -> low, 2-3 -> medium, 4-5 -> high, 6+ -> max
DEFAULT_THRESHOLDS = (1, 2, 4, 6)


def bucket(count: int, thresholds: tuple[int, ...] = DEFAULT_THRESHOLDS) -> IntensityLevel:
    """
    Calculate intensity level for a day's commit count.

    Args:
        count: Number of commits for the day
        thresholds: Minimum counts for LOW, MEDIUM, HIGH and MAX

    Returns:
        The IntensityLevel for the count
    """
    return IntensityLevel(bisect_right(thresholds, count))


def relative_thresholds(max_count: int) -> tuple[int, ...]:
    """
    Thresholds scaled to the busiest day, split into quarters.

    A year with no commits falls back to DEFAULT_THRESHOLDS.
    """
    if max_count <= 0:
        return DEFAULT_THRESHOLDS

    return (
        1,
        max(1, math.ceil(max_count / 4)),
        max(1, math.ceil(max_count / 2)),
        max(1, math.ceil(max_count * 3 / 4)),
    )


def validate_thresholds(thresholds: tuple[int, ...]) -> None:
    """
    Check that thresholds can drive bucket().

    Raises:
        ValueError: Unless there are exactly four positive, non-decreasing ints
    """
    if len(thresholds) != len(IntensityLevel) - 1:
        raise ValueError(
            f"expected {len(IntensityLevel) - 1} thresholds, got {len(thresholds)}"
        )
    if any(t < 1 for t in thresholds):
        raise ValueError("thresholds must be positive")
    if any(a > b for a, b in zip(thresholds, thresholds[1:])):
        raise ValueError("thresholds must be in ascending order")
