from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ProcessSpec:
    """
    Caller-supplied description of one process. Never mutated by the engine.

    Lower ``priority`` values mean higher priority.
    """

    pid: str
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass
class ProcessOutcome:
    """
    Working state and final metrics for one process within a single run.

    A fresh outcome is created for every process on every invocation, so
    nothing here is ever shared with the caller's input or with another run.
    """

    spec: ProcessSpec
    remaining: int
    start_time: Optional[int] = None
    completion_time: Optional[int] = None
    waiting_time: Optional[int] = None
    turnaround_time: Optional[int] = None

    @classmethod
    def from_spec(cls, spec: ProcessSpec) -> "ProcessOutcome":
        return cls(spec=spec, remaining=spec.burst_time)

    @property
    def pid(self) -> str:
        return self.spec.pid

    @property
    def arrival_time(self) -> int:
        return self.spec.arrival_time

    @property
    def burst_time(self) -> int:
        return self.spec.burst_time

    @property
    def priority(self) -> int:
        return self.spec.priority

    @property
    def response_time(self) -> Optional[int]:
        if self.start_time is None:
            return None
        return self.start_time - self.spec.arrival_time

    @property
    def is_finished(self) -> bool:
        return self.completion_time is not None

    def finalize(self, time: int) -> None:
        """Record completion at ``time`` and derive turnaround and waiting."""
        self.remaining = 0
        self.completion_time = time
        self.turnaround_time = time - self.spec.arrival_time
        self.waiting_time = self.turnaround_time - self.spec.burst_time


@dataclass(frozen=True)
class TimelineEntry:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: str
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class SimulationResult:
    algorithm: str
    quantum: Optional[int]
    timeline: List[TimelineEntry] = field(default_factory=list)
    # Completion order.
    processes: List[ProcessOutcome] = field(default_factory=list)

    def outcome(self, pid: str) -> ProcessOutcome:
        for p in self.processes:
            if p.pid == pid:
                return p
        raise KeyError(pid)

    def slices_for(self, pid: str) -> List[TimelineEntry]:
        return [s for s in self.timeline if s.pid == pid]


@dataclass
class SummaryMetrics:
    avg_waiting: float
    avg_turnaround: float
    avg_response: float
    makespan: int


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    idle_time: int
    makespan: int
    throughput: float
    cpu_utilization: float
