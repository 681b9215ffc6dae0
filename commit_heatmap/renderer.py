"""
Terminal rendering for the commit heatmap.
"""

import calendar
import io
from typing import Optional, TextIO

from rich.console import Console
from rich.text import Text

from commit_heatmap.config import (
    LEVEL_COLORS,
    LEVEL_GLYPHS,
    PADDING_GLYPH,
    WEEKDAY_NAMES,
)
from commit_heatmap.errors import RenderError
from commit_heatmap.grid_builder import GridCell, HeatmapGrid
from commit_heatmap.intensity import IntensityLevel

LABEL_WIDTH = 4  # "Sun " / "Mon "
CELL_WIDTH = 2  # glyph plus gap
MONTH_SEPARATOR = "|"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def build_month_header(grid: HeatmapGrid) -> Text:
    """
    Build the month label row.

    Each month's abbreviation starts above the week column in which the
    month's first day falls.
    """
    width = LABEL_WIDTH + len(grid.weeks) * CELL_WIDTH
    row = [" "] * width
    next_free = 0

    for week_index, month in grid.month_starts():
        label = calendar.month_abbr[month]
        pos = LABEL_WIDTH + week_index * CELL_WIDTH
        if pos < next_free:
            continue
        row[pos : pos + len(label)] = label
        next_free = pos + len(label) + 1

    return Text("".join(row).rstrip())


def _cell_text(cell: GridCell) -> tuple[str, Optional[str]]:
    if not cell.in_year:
        return PADDING_GLYPH, None
    return LEVEL_GLYPHS[cell.level], LEVEL_COLORS[cell.level]


def build_weekday_rows(grid: HeatmapGrid) -> list[Text]:
    """
    Build one row per weekday, starting with the grid's week start.

    The gap before a week in which a new month takes over holds a "|".
    """
    boundaries = grid.month_boundaries()
    rows = []
    for weekday_index in range(7):
        name = WEEKDAY_NAMES[(grid.week_start + weekday_index) % 7]
        line = Text(name.ljust(LABEL_WIDTH))
        for week_index, week in enumerate(grid.weeks):
            glyph, style = _cell_text(week[weekday_index])
            line.append(glyph, style=style)
            line.append(MONTH_SEPARATOR if week_index + 1 in boundaries else " ")
        line.rstrip()
        rows.append(line)
    return rows


def build_legend() -> Text:
    """Build the "Less ... More" color key."""
    legend = Text(" " * LABEL_WIDTH + "Less ")
    for level in IntensityLevel:
        legend.append(LEVEL_GLYPHS[level], style=LEVEL_COLORS[level])
        legend.append(" ")
    legend.append("More")
    return legend


def build_summary(stats: dict) -> list[Text]:
    """Build the summary lines shown under the heatmap."""
    lines = [
        Text(
            f"Total: {_plural(stats['total_commits'], 'commit')} "
            f"on {_plural(stats['active_days'], 'day')}"
        )
    ]
    if stats["busiest_day"]:
        lines.append(
            Text(
                f"Busiest day: {stats['busiest_day']} "
                f"({_plural(stats['busiest_count'], 'commit')})"
            )
        )
    lines.append(Text(f"Longest streak: {_plural(stats['longest_streak'], 'day')}"))
    return lines


def render_heatmap(
    grid: HeatmapGrid,
    *,
    repo_label: str,
    stats: Optional[dict] = None,
    color_system: Optional[str] = None,
) -> str:
    """
    Render the complete heatmap as a block of text.

    Args:
        grid: Grid from build_grid()
        repo_label: Repository path shown in the title
        stats: Optional summary from calculate_year_stats()
        color_system: rich color system ("standard", "256", "truecolor"),
            or None for plain text without ANSI codes

    Returns:
        The rendered text, ending with a newline
    """
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        color_system=color_system,
        force_terminal=color_system is not None,
        width=LABEL_WIDTH + len(grid.weeks) * CELL_WIDTH + 1,
        highlight=False,
        markup=False,
        emoji=False,
    )

    console.print(Text(f"Repo: {repo_label}"), soft_wrap=True)
    console.print(Text(f"Year: {grid.year}"), soft_wrap=True)
    console.print()
    console.print(build_month_header(grid), soft_wrap=True)
    for row in build_weekday_rows(grid):
        console.print(row, soft_wrap=True)
    console.print()
    console.print(build_legend(), soft_wrap=True)

    if stats is not None:
        console.print()
        for line in build_summary(stats):
            console.print(line, soft_wrap=True)

    return buffer.getvalue()


def write_output(text: str, stream: TextIO) -> None:
    """
    Write rendered output to a stream.

    Raises:
        RenderError: If the stream cannot be written (e.g. broken pipe)
    """
    try:
        stream.write(text)
        stream.flush()
    except OSError as e:
        raise RenderError(f"Failed to write heatmap: {e}") from e
