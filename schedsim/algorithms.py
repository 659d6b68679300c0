from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import Callable, Deque, Dict, List, Optional, Sequence, Tuple, Union

from .errors import DuplicateProcessIdError, InvalidProcessError, UnknownAlgorithmError
from .models import ProcessOutcome, ProcessSpec, SimulationResult, TimelineEntry

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2


class Algorithm(str, Enum):
    FCFS = "fcfs"
    SJF = "sjf"
    PRIORITY = "priority"
    ROUND_ROBIN = "rr"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    Algorithm.FCFS: "FCFS",
    Algorithm.SJF: "SJF (non-preemptive)",
    Algorithm.PRIORITY: "Priority (non-preemptive)",
    Algorithm.ROUND_ROBIN: "Round Robin",
}

_ALIASES = {
    "round_robin": Algorithm.ROUND_ROBIN,
    "round-robin": Algorithm.ROUND_ROBIN,
    "roundrobin": Algorithm.ROUND_ROBIN,
    "fifo": Algorithm.FCFS,
}


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_processes(processes: Sequence[ProcessSpec]) -> None:
    """
    Reject malformed input before any simulation starts.

    Raises InvalidProcessError for negative arrivals or non-positive bursts
    and DuplicateProcessIdError for repeated ids. Nothing is clamped.
    """
    seen: set[str] = set()
    for p in processes:
        if not _is_int(p.arrival_time) or p.arrival_time < 0:
            raise InvalidProcessError(p.pid, f"arrival_time must be an integer >= 0, got {p.arrival_time!r}")
        if not _is_int(p.burst_time) or p.burst_time <= 0:
            raise InvalidProcessError(p.pid, f"burst_time must be an integer > 0, got {p.burst_time!r}")
        if not _is_int(p.priority):
            raise InvalidProcessError(p.pid, f"priority must be an integer, got {p.priority!r}")
        if p.pid in seen:
            raise DuplicateProcessIdError(p.pid)
        seen.add(p.pid)


def coerce_quantum(quantum: Optional[int]) -> int:
    """
    Round-robin quantum to actually use: None means DEFAULT_QUANTUM and any
    non-positive value silently becomes 1.
    """
    if quantum is None:
        return DEFAULT_QUANTUM
    if quantum <= 0:
        logger.debug("Coercing non-positive quantum %s to 1", quantum)
        return 1
    return quantum


def _dispatch_whole(outcome: ProcessOutcome, time: int, timeline: List[TimelineEntry]) -> int:
    """Run a process to completion starting at ``time``; return the new clock."""
    end_time = time + outcome.burst_time
    outcome.start_time = time
    timeline.append(TimelineEntry(pid=outcome.pid, start_time=time, end_time=end_time))
    outcome.finalize(end_time)
    logger.debug("Dispatched %s for [%d, %d)", outcome.pid, time, end_time)
    return end_time


def schedule_fcfs(processes: Sequence[ProcessSpec], quantum: Optional[int] = None) -> SimulationResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Ties on arrival keep the caller's order.
    """
    validate_processes(processes)
    outcomes = sorted((ProcessOutcome.from_spec(p) for p in processes), key=lambda o: o.arrival_time)

    time = 0
    timeline: List[TimelineEntry] = []
    finished: List[ProcessOutcome] = []

    for o in outcomes:
        if time < o.arrival_time:
            logger.debug("CPU idle from %d to %d", time, o.arrival_time)
            time = o.arrival_time
        time = _dispatch_whole(o, time, timeline)
        finished.append(o)

    return SimulationResult(algorithm=Algorithm.FCFS.label, quantum=None, timeline=timeline, processes=finished)


def _schedule_non_preemptive(
    processes: Sequence[ProcessSpec],
    key: Callable[[ProcessOutcome], Tuple[int, ...]],
    algorithm: Algorithm,
) -> SimulationResult:
    """
    Shared loop for SJF and Priority: at each decision point pick the ready
    process with the smallest ``key``, falling back to input order, and run
    it to completion. When nothing is ready the clock jumps to the next
    arrival.
    """
    validate_processes(processes)
    pending: List[Tuple[int, ProcessOutcome]] = [
        (index, ProcessOutcome.from_spec(p)) for index, p in enumerate(processes)
    ]

    time = 0
    timeline: List[TimelineEntry] = []
    finished: List[ProcessOutcome] = []

    while pending:
        ready = [(index, o) for index, o in pending if o.arrival_time <= time]

        if not ready:
            next_arrival = min(o.arrival_time for _, o in pending)
            logger.debug("CPU idle from %d to %d", time, next_arrival)
            time = next_arrival
            continue

        index, chosen = min(ready, key=lambda item: (*key(item[1]), item[0]))
        pending = [(i, o) for i, o in pending if i != index]

        time = _dispatch_whole(chosen, time, timeline)
        finished.append(chosen)

    return SimulationResult(algorithm=algorithm.label, quantum=None, timeline=timeline, processes=finished)


def schedule_sjf(processes: Sequence[ProcessSpec], quantum: Optional[int] = None) -> SimulationResult:
    """
    Shortest Job First (non-preemptive).

    Among arrived processes choose the smallest burst; ties go to the
    earlier arrival, then to whichever came first in the input.
    """
    return _schedule_non_preemptive(
        processes,
        key=lambda o: (o.burst_time, o.arrival_time),
        algorithm=Algorithm.SJF,
    )


def schedule_priority(processes: Sequence[ProcessSpec], quantum: Optional[int] = None) -> SimulationResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. Ties go to the
    shorter burst, then to input order. Arrival time is not a tie-breaker.
    """
    return _schedule_non_preemptive(
        processes,
        key=lambda o: (o.priority, o.burst_time),
        algorithm=Algorithm.PRIORITY,
    )


def schedule_rr(processes: Sequence[ProcessSpec], quantum: Optional[int] = None) -> SimulationResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive while a slice is running are queued ahead of the
    process that was just preempted.
    """
    validate_processes(processes)
    quantum = coerce_quantum(quantum)

    # Stable sort, so equal arrivals are admitted in input order.
    arrivals = sorted((ProcessOutcome.from_spec(p) for p in processes), key=lambda o: o.arrival_time)
    n = len(arrivals)
    next_index = 0

    time = 0
    timeline: List[TimelineEntry] = []
    finished: List[ProcessOutcome] = []
    ready: Deque[ProcessOutcome] = deque()

    def admit(current_time: int) -> None:
        nonlocal next_index
        while next_index < n and arrivals[next_index].arrival_time <= current_time:
            ready.append(arrivals[next_index])
            next_index += 1

    while len(finished) < n:
        admit(time)

        if not ready:
            # Nothing queued but work remains, so the next process has not arrived yet.
            logger.debug("CPU idle from %d to %d", time, arrivals[next_index].arrival_time)
            time = arrivals[next_index].arrival_time
            continue

        current = ready.popleft()
        if current.start_time is None:
            current.start_time = time

        run_time = min(quantum, current.remaining)
        slice_start = time
        time += run_time
        current.remaining -= run_time
        timeline.append(TimelineEntry(pid=current.pid, start_time=slice_start, end_time=time))

        admit(time)

        if current.remaining > 0:
            ready.append(current)
        else:
            current.finalize(time)
            finished.append(current)

    return SimulationResult(algorithm=Algorithm.ROUND_ROBIN.label, quantum=quantum, timeline=timeline, processes=finished)


ALGORITHMS: Dict[Algorithm, Callable[..., SimulationResult]] = {
    Algorithm.FCFS: schedule_fcfs,
    Algorithm.SJF: schedule_sjf,
    Algorithm.PRIORITY: schedule_priority,
    Algorithm.ROUND_ROBIN: schedule_rr,
}


def resolve_algorithm(name: Union[str, Algorithm]) -> Algorithm:
    if isinstance(name, Algorithm):
        return name
    key = str(name).strip().lower()
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return Algorithm(key)
    except ValueError:
        raise UnknownAlgorithmError(str(name)) from None


def simulate(
    processes: Sequence[ProcessSpec],
    algorithm: Union[str, Algorithm],
    quantum: Optional[int] = None,
) -> SimulationResult:
    """
    Run one simulation and return its timeline and finalized outcomes.

    The input is only read; every call works on its own copies, so repeated
    calls with the same arguments give identical results.
    """
    alg = resolve_algorithm(algorithm)
    func = ALGORITHMS[alg]
    result = func(list(processes), quantum=quantum if alg is Algorithm.ROUND_ROBIN else None)
    logger.info(
        "%s finished %d process(es) in %d slice(s)",
        result.algorithm,
        len(result.processes),
        len(result.timeline),
    )
    return result