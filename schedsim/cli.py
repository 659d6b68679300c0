from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import DEFAULT_QUANTUM, Algorithm, resolve_algorithm, simulate
from .gantt import build_rich_gantt, render_gantt
from .metrics import compute_system_metrics, summarize
from .models import ProcessSpec, SimulationResult
from .workload_io import export_result_csv, export_timeline_csv, load_workload, sample_workload

ALGORITHM_NAMES = [alg.value for alg in Algorithm]


def _add_workload_args(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--workload",
        "-w",
        help="Path to JSON or CSV workload file.",
    )
    source.add_argument(
        "--sample",
        action="store_true",
        help="Use the built-in three-process sample workload.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, Priority, RR).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log scheduling decisions to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHM_NAMES)}).",
    )
    _add_workload_args(run_parser)
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}; values <= 0 become 1).",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Draw the Gantt chart as plain text instead of colored blocks.",
    )
    run_parser.add_argument(
        "--export",
        "-o",
        default=None,
        help="Write per-process metrics to this CSV file.",
    )
    run_parser.add_argument(
        "--export-timeline",
        default=None,
        help="Write the timeline slices to this CSV file.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    _add_workload_args(compare_parser)
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHM_NAMES),
        help=f"Algorithms to compare (default: {' '.join(ALGORITHM_NAMES)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _processes_from_args(args: argparse.Namespace) -> List[ProcessSpec]:
    if args.sample:
        return sample_workload()
    return load_workload(Path(args.workload))


def _print_result(result: SimulationResult, console: Console, plain: bool = False) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
    else:
        console.print(build_rich_gantt(result.timeline))

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Priority",
        "Start",
        "Complete",
        "Wait",
        "Turnaround",
        "Response",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in sorted(result.processes, key=lambda o: o.pid):
        proc_table.add_row(
            p.pid,
            str(p.arrival_time),
            str(p.burst_time),
            str(p.priority),
            str(p.start_time),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.response_time),
        )

    console.print(proc_table)
    console.print()

    summary = summarize(result)
    system = compute_system_metrics(result)
    sys_table = Table(title="Summary", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{summary.avg_waiting:.2f}")
    sys_table.add_row("Avg turnaround", f"{summary.avg_turnaround:.2f}")
    sys_table.add_row("Avg response", f"{summary.avg_response:.2f}")
    sys_table.add_row("Total time (timeline end)", str(summary.makespan))
    sys_table.add_row("Idle time", str(system.idle_time))
    sys_table.add_row("Throughput (proc/time)", f"{system.throughput:.3f}")
    sys_table.add_row("CPU utilization", f"{system.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def _print_comparison(
    processes: List[ProcessSpec],
    algorithms: List[str],
    quantum: int,
    console: Console,
) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("Makespan", justify="right")

    for name in algorithms:
        alg = resolve_algorithm(name)
        result = simulate(processes, alg, quantum=quantum)
        summary = summarize(result)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary.avg_waiting:.2f}",
            f"{summary.avg_turnaround:.2f}",
            f"{summary.avg_response:.2f}",
            str(summary.makespan),
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    console = Console()

    try:
        processes = _processes_from_args(args)

        if args.command == "run":
            result = simulate(processes, args.algorithm, quantum=args.quantum)
            _print_result(result, console, plain=args.plain)
            if args.export:
                written = export_result_csv(result, args.export)
                console.print(f"[green]Exported metrics to {written}[/green]")
            if args.export_timeline:
                written = export_timeline_csv(result, args.export_timeline)
                console.print(f"[green]Exported timeline to {written}[/green]")
            return 0

        if args.command == "compare":
            _print_comparison(processes, args.algorithms, args.quantum, console)
            return 0
    except (OSError, ValueError) as exc:
        console.print(f"[red]Error: {exc}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
