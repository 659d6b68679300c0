import csv
from pathlib import Path

import pytest

from schedsim.algorithms import schedule_rr
from schedsim.errors import WorkloadError
from schedsim.models import ProcessSpec
from schedsim.workload_io import (
    RESULT_COLUMNS,
    export_result_csv,
    export_timeline_csv,
    load_workload,
    sample_workload,
)


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], ProcessSpec)
    assert procs[0].priority == 1
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,3,1\nB,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == "A"
    assert procs[0].burst_time == 3
    assert procs[1].priority == 0


def test_load_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("")
    with pytest.raises(WorkloadError):
        load_workload(p)


def test_load_json_not_a_list(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"pid": "A"}')
    with pytest.raises(WorkloadError):
        load_workload(p)


def test_load_bad_entry_names_it(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,zero,3\n")
    with pytest.raises(WorkloadError, match="zero"):
        load_workload(p)


def test_sample_workload():
    procs = sample_workload()
    assert [(p.pid, p.arrival_time, p.burst_time, p.priority) for p in procs] == [
        ("P1", 0, 5, 2),
        ("P2", 2, 3, 1),
        ("P3", 4, 1, 3),
    ]


def test_export_result_csv(tmp_path: Path):
    res = schedule_rr(sample_workload(), quantum=2)
    out = export_result_csv(res, tmp_path / "metrics.csv")
    with out.open(newline="") as f:
        rows = list(csv.DictReader(f))
    assert list(rows[0].keys()) == RESULT_COLUMNS
    by_pid = {r["pid"]: r for r in rows}
    assert by_pid["P1"]["completion_time"] == "9"
    assert by_pid["P2"]["waiting_time"] == "3"
    assert by_pid["P3"]["turnaround_time"] == "3"


def test_export_timeline_csv(tmp_path: Path):
    res = schedule_rr(sample_workload(), quantum=2)
    out = export_timeline_csv(res, tmp_path / "timeline.csv")
    lines = out.read_text().splitlines()
    assert lines[0] == "pid,start_time,end_time"
    assert lines[1:3] == ["P1,0,2", "P2,2,4"]
    assert len(lines) == 1 + len(res.timeline)


@pytest.mark.parametrize(
    "entry",
    [
        '{"pid":"A","arrival_time":-0.5,"burst_time":3}',
        '{"pid":"A","arrival_time":0,"burst_time":2.9}',
        '{"pid":"A","arrival_time":0,"burst_time":3,"priority":1.7}',
        '{"pid":"A","arrival_time":true,"burst_time":3}',
        '{"pid":"A","arrival_time":0,"burst_time":3,"priority":false}',
        '{"pid":"A","arrival_time":null,"burst_time":3}',
    ],
)
def test_load_json_rejects_non_integer_values(tmp_path: Path, entry):
    p = tmp_path / "w.json"
    p.write_text(f"[{entry}]")
    with pytest.raises(WorkloadError):
        load_workload(p)


def test_load_accepts_integer_strings(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":" 4 ","burst_time":"2","priority":"-1"}]')
    procs = load_workload(p)
    assert (procs[0].arrival_time, procs[0].burst_time, procs[0].priority) == (4, 2, -1)


def test_load_csv_rejects_fractional_burst(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,0,2.5\n")
    with pytest.raises(WorkloadError):
        load_workload(p)
