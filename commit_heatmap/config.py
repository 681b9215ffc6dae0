"""
Configuration management for commit-heatmap.

Loads presentation settings from environment variables (or a .env file)
and holds the display constants used by the renderer.
"""

import calendar
import os
from dotenv import load_dotenv

from commit_heatmap.errors import ConfigurationError
from commit_heatmap.intensity import validate_thresholds

# Load .env file from the working directory
load_dotenv()

HEATMAP_WEEK_START = os.getenv("HEATMAP_WEEK_START", "sunday")
HEATMAP_SCALE = os.getenv("HEATMAP_SCALE", "fixed")
HEATMAP_THRESHOLDS = os.getenv("HEATMAP_THRESHOLDS", "1,2,4,6")

WEEK_STARTS = {
    "sunday": calendar.SUNDAY,
    "monday": calendar.MONDAY,
}
SCALES = ("fixed", "relative")

# datetime.date can only represent years 1..9999
MIN_YEAR = 1
MAX_YEAR = 9999

# Indexed by IntensityLevel value: none, low, medium, high, max
LEVEL_COLORS = ("grey23", "#0e4429", "#006d32", "#26a641", "#39d353")
LEVEL_GLYPHS = ("·", "░", "▒", "▓", "█")
PADDING_GLYPH = " "

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def parse_thresholds(raw: str) -> tuple[int, ...]:
    """
    Parse a comma separated threshold list such as "1,2,4,6".

    Raises:
        ValueError: If any entry is not an integer
    """
    return tuple(int(part.strip()) for part in raw.split(",") if part.strip())


def load_settings() -> dict:
    """
    Parse the configured presentation settings.

    Returns:
        Dictionary with:
            - week_start: calendar.SUNDAY or calendar.MONDAY
            - scale: "fixed" or "relative"
            - thresholds: tuple of four ints

    Raises:
        ConfigurationError: If any setting is invalid (see validate_config)
    """
    validate_config()
    return {
        "week_start": WEEK_STARTS[HEATMAP_WEEK_START.strip().lower()],
        "scale": HEATMAP_SCALE.strip().lower(),
        "thresholds": parse_thresholds(HEATMAP_THRESHOLDS),
    }


def validate_config():
    """Validate that the configured settings are usable."""
    problems = []

    if HEATMAP_WEEK_START.strip().lower() not in WEEK_STARTS:
        problems.append(
            f"HEATMAP_WEEK_START must be one of {', '.join(WEEK_STARTS)} "
            f"(got {HEATMAP_WEEK_START!r})"
        )

    if HEATMAP_SCALE.strip().lower() not in SCALES:
        problems.append(
            f"HEATMAP_SCALE must be one of {', '.join(SCALES)} "
            f"(got {HEATMAP_SCALE!r})"
        )

    try:
        validate_thresholds(parse_thresholds(HEATMAP_THRESHOLDS))
    except ValueError as e:
        problems.append(f"HEATMAP_THRESHOLDS: {e} (got {HEATMAP_THRESHOLDS!r})")

    if problems:
        raise ConfigurationError(
            "Invalid configuration:\n  " + "\n  ".join(problems)
        )
