from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List

from .errors import WorkloadError
from .models import ProcessSpec, SimulationResult

RESULT_COLUMNS = [
    "pid",
    "arrival_time",
    "burst_time",
    "priority",
    "start_time",
    "completion_time",
    "waiting_time",
    "turnaround_time",
]

TIMELINE_COLUMNS = ["pid", "start_time", "end_time"]


def sample_workload() -> List[ProcessSpec]:
    """
    Small demo workload: three processes with staggered arrivals.
    """
    return [
        ProcessSpec("P1", arrival_time=0, burst_time=5, priority=2),
        ProcessSpec("P2", arrival_time=2, burst_time=3, priority=1),
        ProcessSpec("P3", arrival_time=4, burst_time=1, priority=3),
    ]


def load_workload(path: str | Path) -> List[ProcessSpec]:
    """
    Load a workload from a JSON or CSV file into a list of ProcessSpec objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise WorkloadError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[ProcessSpec]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadError(f"Malformed JSON workload {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[ProcessSpec]:
    processes: List[ProcessSpec] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _parse_int(value) -> int:
    """
    Accept real ints and strings holding an integer. Floats, booleans and
    anything else are rejected rather than truncated.
    """
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"expected an integer, got {value!r}")


def _process_from_mapping(mapping) -> ProcessSpec:
    try:
        pid = str(mapping["pid"]).strip()
        arrival_time = _parse_int(mapping["arrival_time"])
        burst_time = _parse_int(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = _parse_int(priority_val) if priority_val not in (None, "") else 0
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise WorkloadError(f"Invalid process entry: {mapping!r}") from exc

    return ProcessSpec(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )


def export_result_csv(result: SimulationResult, path: str | Path) -> Path:
    """
    Write one row per process with its timing metrics. Returns the path written.
    """
    path = Path(path)
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(RESULT_COLUMNS)
        for p in result.processes:
            writer.writerow(
                [
                    p.pid,
                    p.arrival_time,
                    p.burst_time,
                    p.priority,
                    p.start_time,
                    p.completion_time,
                    p.waiting_time,
                    p.turnaround_time,
                ]
            )
    return path


def export_timeline_csv(result: SimulationResult, path: str | Path) -> Path:
    path = Path(path)
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(TIMELINE_COLUMNS)
        for sl in result.timeline:
            writer.writerow([sl.pid, sl.start_time, sl.end_time])
    return path
