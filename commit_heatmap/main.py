"""
commit-heatmap: a contribution-graph style view of a repository's year

Entry point for the command line tool.
"""

import argparse
import logging
import sys
from datetime import date
from typing import Callable, Optional, TextIO

from rich.console import Console

from commit_heatmap import config
from commit_heatmap.errors import HeatmapError, InvalidYearError
from commit_heatmap.git_history import read_commit_timestamps
from commit_heatmap.grid_builder import build_grid
from commit_heatmap.history_calculator import calculate_day_counts
from commit_heatmap.intensity import relative_thresholds
from commit_heatmap.renderer import render_heatmap, write_output
from commit_heatmap.stats_calculator import calculate_year_stats

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

logger = logging.getLogger(__name__)


def parse_year(text: str) -> int:
    """
    Parse and validate a year argument.

    Raises:
        InvalidYearError: If text is not an integer in MIN_YEAR..MAX_YEAR
    """
    try:
        year = int(text.strip())
    except (AttributeError, ValueError):
        raise InvalidYearError(f"Invalid year {text!r}: expected a number") from None

    if not config.MIN_YEAR <= year <= config.MAX_YEAR:
        raise InvalidYearError(
            f"Invalid year {year}: must be between "
            f"{config.MIN_YEAR} and {config.MAX_YEAR}"
        )
    return year


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="commit-heatmap",
        description="Show a calendar heatmap of commits for one year of a git repository",
    )
    parser.add_argument("-r", "--repo", default=".", help="Path to the repository root (default: current directory)")
    # Kept as a string so validation can raise InvalidYearError itself
    parser.add_argument("-y", "--year", default=None, help="Year to show (default: current year)")
    parser.add_argument("--week-start", choices=sorted(config.WEEK_STARTS), default=None, help="First day of each week column (default: HEATMAP_WEEK_START or sunday)")
    parser.add_argument("--scale", choices=config.SCALES, default=None, help="Color thresholds: fixed cutoffs or relative to the busiest day (default: HEATMAP_SCALE or fixed)")
    parser.add_argument("--color", choices=("auto", "always", "never"), default="auto", help="Use ANSI colors (default: auto)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return parser


def _color_system(mode: str, stream: TextIO) -> Optional[str]:
    if mode == "never":
        return None
    if mode == "always":
        return "truecolor"
    return Console(file=stream).color_system


def generate_heatmap(
    repo_path: str,
    year: int,
    *,
    week_start: int,
    scale: str,
    thresholds: tuple[int, ...],
    color_system: Optional[str] = None,
) -> str:
    """
    Run the whole pipeline and return the rendered heatmap.

    Raises:
        RepositoryError: If the repository cannot be read
    """
    history = read_commit_timestamps(repo_path)
    day_counts = calculate_day_counts(history, year)

    if scale == "relative":
        thresholds = relative_thresholds(max(day_counts.values()))
    logger.debug("Using thresholds %s", thresholds)

    grid = build_grid(day_counts, year, week_start=week_start, thresholds=thresholds)
    return render_heatmap(
        grid,
        repo_label=repo_path,
        stats=calculate_year_stats(day_counts),
        color_system=color_system,
    )


def _log_handler(stream: TextIO, verbose: bool) -> logging.Handler:
    """Handler sending this package's log records to stream."""
    handler = logging.StreamHandler(stream)
    handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    return handler


def main(
    argv: Optional[list[str]] = None,
    clock: Callable[[], date] = date.today,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """
    Run commit-heatmap.

    Args:
        argv: Command line arguments (default: sys.argv[1:])
        clock: Returns today's date; decides the default year
        stdout: Stream for the heatmap (default: sys.stdout)
        stderr: Stream for error messages and logs (default: sys.stderr)

    Returns:
        Process exit status
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    args = build_parser().parse_args(argv)

    # Attached for this call only, so each call logs to its own stderr
    package_logger = logging.getLogger("commit_heatmap")
    handler = _log_handler(stderr, args.verbose)
    previous_level = package_logger.level
    package_logger.addHandler(handler)
    if args.verbose:
        package_logger.setLevel(logging.DEBUG)

    try:
        # Fail on a bad year before reading settings or the repository
        year = parse_year(args.year) if args.year is not None else clock().year

        settings = config.load_settings()
        week_start = config.WEEK_STARTS[args.week_start] if args.week_start else settings["week_start"]
        scale = args.scale or settings["scale"]

        logger.info("Rendering %s for %d", args.repo, year)
        output = generate_heatmap(
            args.repo,
            year,
            week_start=week_start,
            scale=scale,
            thresholds=settings["thresholds"],
            color_system=_color_system(args.color, stdout),
        )
        write_output(output, stdout)
    except HeatmapError as e:
        print(f"Error: {type(e).__name__}: {e}", file=stderr)
        return EXIT_FAILURE
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)

    return EXIT_SUCCESS


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
