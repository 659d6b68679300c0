import re

from rich.console import Console

from schedsim.algorithms import schedule_fcfs, schedule_rr
from schedsim.gantt import PALETTE, assign_colors, build_rich_gantt, render_gantt, time_marks
from schedsim.models import ProcessSpec, TimelineEntry
from schedsim.workload_io import sample_workload


def _marks_by_column(marks):
    return {m.start(): int(m.group()) for m in re.finditer(r"\d+", marks)}


def test_render_gantt_plain():
    res = schedule_fcfs(sample_workload())
    lines = render_gantt(res.timeline).splitlines()
    assert lines[0] == "Gantt Chart:"
    assert lines[1] == "|=========|"
    assert lines[2] == " P1   P2 P"
    # The final 8 and 9 would touch, so the 8 is dropped.
    assert lines[3] == " 0    5   9"


def test_render_gantt_shows_idle():
    res = schedule_fcfs([ProcessSpec("A", 2, 1), ProcessSpec("B", 5, 2)])
    assert render_gantt(res.timeline).splitlines()[1] == "|..=..==|"


def test_render_gantt_empty():
    assert render_gantt([]) == "(no execution)"


def test_time_marks_start_at_their_column():
    slices = [
        TimelineEntry("A", 0, 4),
        TimelineEntry("B", 4, 8),
        TimelineEntry("C", 10, 14),
    ]
    assert time_marks(slices) == "0   4   8 10  14"
    assert time_marks(slices, offset=1) == " 0   4   8 10  14"


def test_time_marks_drop_crowded_labels_but_stay_aligned():
    slices = [
        TimelineEntry("A", 0, 1),
        TimelineEntry("B", 1, 2),
        TimelineEntry("C", 2, 12),
    ]
    marks = time_marks(slices)
    assert marks == "0 2         12"
    for column, value in _marks_by_column(marks).items():
        assert column == value


def test_time_marks_align_for_rr_sample():
    res = schedule_rr(sample_workload(), quantum=2)
    placed = _marks_by_column(time_marks(res.timeline))
    assert all(column == value for column, value in placed.items())
    assert max(placed.values()) == res.timeline[-1].end_time


def test_colors_follow_first_appearance():
    res = schedule_rr(sample_workload(), quantum=2)
    colors = assign_colors(res.timeline)
    assert colors == {"P1": PALETTE[0], "P2": PALETTE[1], "P3": PALETTE[2]}


def test_build_rich_gantt_marks_inside_panel():
    slices = [TimelineEntry("A", 0, 4), TimelineEntry("B", 6, 10)]
    console = Console(record=True, width=80)
    console.print(build_rich_gantt(slices))
    lines = console.export_text().splitlines()
    assert "Gantt Chart" in lines[0]
    # Panel border plus one column of padding precede the bar.
    assert any(line.startswith("│ A     B") for line in lines)
    assert any(line.startswith("│ " + time_marks(slices)) for line in lines)


def test_build_rich_gantt_empty():
    console = Console(record=True, width=80)
    console.print(build_rich_gantt([]))
    assert "No execution" in console.export_text()
