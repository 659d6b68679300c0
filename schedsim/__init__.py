"""
CPU scheduling simulator.

Computes execution timelines and per-process waiting/turnaround metrics for
FCFS, non-preemptive SJF, non-preemptive Priority and Round Robin over a
fully known set of processes.
"""

from .algorithms import DEFAULT_QUANTUM, Algorithm, simulate
from .errors import (
    DuplicateProcessIdError,
    InvalidProcessError,
    SchedulingError,
    UnknownAlgorithmError,
    WorkloadError,
)
from .metrics import summarize
from .models import ProcessOutcome, ProcessSpec, SimulationResult, SummaryMetrics, TimelineEntry

__all__ = [
    "Algorithm",
    "DEFAULT_QUANTUM",
    "DuplicateProcessIdError",
    "InvalidProcessError",
    "ProcessOutcome",
    "ProcessSpec",
    "SchedulingError",
    "SimulationResult",
    "SummaryMetrics",
    "TimelineEntry",
    "UnknownAlgorithmError",
    "WorkloadError",
    "simulate",
    "summarize",
]
