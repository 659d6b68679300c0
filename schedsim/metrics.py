from __future__ import annotations

from .models import SimulationResult, SummaryMetrics, SystemMetrics


def makespan(result: SimulationResult) -> int:
    """
    End of the last timeline entry. Entries are emitted in chronological
    order by every algorithm, so the last one finishes last.
    """
    if not result.timeline:
        return 0
    return result.timeline[-1].end_time


def summarize(result: SimulationResult) -> SummaryMetrics:
    """
    Average waiting, turnaround and response time plus makespan. All values
    are zero for an empty result.
    """
    n = len(result.processes)
    if n == 0:
        return SummaryMetrics(avg_waiting=0.0, avg_turnaround=0.0, avg_response=0.0, makespan=makespan(result))

    return SummaryMetrics(
        avg_waiting=sum(p.waiting_time for p in result.processes) / n,
        avg_turnaround=sum(p.turnaround_time for p in result.processes) / n,
        avg_response=sum(p.response_time for p in result.processes) / n,
        makespan=makespan(result),
    )


def compute_system_metrics(result: SimulationResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization from the timeline.
    """
    span = makespan(result)
    if span == 0:
        return SystemMetrics(cpu_busy_time=0, idle_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)

    cpu_busy_time = sum(slice_.duration for slice_ in result.timeline)
    return SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        idle_time=span - cpu_busy_time,
        makespan=span,
        throughput=len(result.processes) / span,
        cpu_utilization=cpu_busy_time / span,
    )
