from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import TimelineEntry

PALETTE = ["cyan", "green", "magenta", "yellow", "blue", "red", "bright_black"]


def assign_colors(slices: Sequence[TimelineEntry]) -> Dict[str, str]:
    """
    Map each pid to a palette color in order of first appearance.
    """
    colors: Dict[str, str] = {}
    for sl in slices:
        if sl.pid not in colors:
            colors[sl.pid] = PALETTE[len(colors) % len(PALETTE)]
    return colors


def _segments(slices: Sequence[TimelineEntry]) -> Iterator[Tuple[Optional[str], int]]:
    """Yield ``(pid, width)`` per slice and ``(None, width)`` per idle gap, one column per time unit."""
    last_time = 0
    for sl in slices:
        if sl.start_time > last_time:
            yield None, sl.start_time - last_time
        yield sl.pid, sl.duration
        last_time = sl.end_time


def time_marks(slices: Sequence[TimelineEntry], offset: int = 0) -> str:
    """
    Axis line whose labels start at the column of the time they name.

    Column ``t + offset`` holds the first digit of mark ``t``. When two marks
    would touch, the earlier one is dropped so the later boundaries (and the
    final end time) always show.
    """
    if not slices:
        return ""

    boundaries = {0}
    for sl in slices:
        boundaries.update((sl.start_time, sl.end_time))

    placed: List[Tuple[int, str]] = []
    next_free: Optional[int] = None
    for t in sorted(boundaries, reverse=True):
        col, label = t + offset, str(t)
        if next_free is None or col + len(label) < next_free:
            placed.append((col, label))
            next_free = col

    width = max(col + len(label) for col, label in placed)
    chars = [" "] * width
    for col, label in placed:
        chars[col:col + len(label)] = label
    return "".join(chars)


def render_gantt(slices: List[TimelineEntry]) -> str:
    """
    Plain-text Gantt chart; idle time is drawn with dots.
    """
    if not slices:
        return "(no execution)"

    bar = "|"
    labels = " "
    for pid, width in _segments(slices):
        if pid is None:
            bar += "." * width
            labels += " " * width
        else:
            bar += "=" * width
            labels += pid[:width].ljust(width)
    bar += "|"

    return "\n".join(["Gantt Chart:", bar, labels, time_marks(slices, offset=1)])


def build_rich_gantt(slices: List[TimelineEntry]) -> Panel:
    """
    Colored Gantt chart panel: one bar row, a pid row and the time axis.
    """
    if not slices:
        return Panel("No execution", title="Gantt Chart")

    colors = assign_colors(slices)
    bar = Text(no_wrap=True)
    labels = Text(no_wrap=True)
    for pid, width in _segments(slices):
        if pid is None:
            bar.append(" " * width)
            labels.append(" " * width)
        else:
            bar.append(" " * width, style=f"on {colors[pid]}")
            labels.append(pid[:width].ljust(width), style="bold")

    grid = Table.grid(padding=(0, 0))
    grid.add_row(bar)
    grid.add_row(labels)
    grid.add_row(Text(time_marks(slices), style="dim", no_wrap=True))
    return Panel.fit(grid, title="Gantt Chart", padding=(0, 1))
