"""
Calculate summary statistics for a year of commit activity.
"""

from datetime import date, timedelta
from typing import Mapping


def calculate_year_stats(day_counts: Mapping[date, int]) -> dict:
    """
    Calculate summary statistics from per-day commit counts.

    Args:
        day_counts: Mapping from date to commit count (from calculate_day_counts)

    Returns:
        Dictionary with:
        - total_commits: Sum of all commits
        - active_days: Number of days with at least one commit
        - busiest_day: Date with the most commits (YYYY-MM-DD), earliest on ties,
          or None when there are no commits
        - busiest_count: Commits on the busiest day
        - longest_streak: Most consecutive days with commits
    """
    total_commits = 0
    active_days = 0
    busiest_day = None
    busiest_count = 0

    for day in sorted(day_counts):
        count = day_counts[day]
        total_commits += count
        if count > 0:
            active_days += 1
        if count > busiest_count:
            busiest_day = day
            busiest_count = count

    return {
        "total_commits": total_commits,
        "active_days": active_days,
        "busiest_day": busiest_day.isoformat() if busiest_day else None,
        "busiest_count": busiest_count,
        "longest_streak": _calculate_longest_streak(
            [day for day, count in day_counts.items() if count > 0]
        ),
    }


def _calculate_longest_streak(commit_dates: list[date]) -> int:
    """
    Calculate the longest run of consecutive dates.

    Args:
        commit_dates: Dates with commits, in any order

    Returns:
        Longest streak count
    """
    if not commit_dates:
        return 0

    commit_dates = sorted(commit_dates)
    longest = 1
    current_streak = 1

    for i in range(1, len(commit_dates)):
        if commit_dates[i] - commit_dates[i - 1] == timedelta(days=1):
            current_streak += 1
            longest = max(longest, current_streak)
        else:
            current_streak = 1

    return longest
