from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import run_algorithm
from .errors import SchedulerError
from .gantt import ColorMap, build_rich_gantt
from .metrics import format_average
from .models import ScheduleResult
from .process_table import ProcessTable
from .workload_io import load_workload, save_workload

logger = logging.getLogger(__name__)

EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sjf-scheduler",
        description="Non-preemptive Shortest Job First CPU scheduling simulator.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase log output (-v for info, -vv for debug).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Schedule the processes in a workload file.")
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--scale",
        "-s",
        type=int,
        default=2,
        help="Gantt chart characters per time unit (default: 2).",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Show a simple time-stepped simulation in the terminal.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=0.3,
        help="Seconds to wait between steps when --step is used (default: 0.3).",
    )

    menu_parser = subparsers.add_parser(
        "menu",
        help="Interactively add, remove and schedule processes.",
    )
    menu_parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Workload file to preload into the process list.",
    )
    menu_parser.add_argument(
        "--scale",
        "-s",
        type=int,
        default=2,
        help="Gantt chart characters per time unit (default: 2).",
    )

    return parser


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _print_result(
    result: ScheduleResult,
    console: Optional[Console] = None,
    colors: Optional[ColorMap] = None,
    scale: int = 2,
) -> None:
    console = console or Console()
    colors = colors or ColorMap()

    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    console.print()

    panel, time_marks = build_rich_gantt(result.timeline, colors=colors, scale=scale)
    console.print(panel)
    if time_marks:
        # Panel border and padding take two columns.
        console.print("  " + time_marks, highlight=False)

    console.print()

    headers = [
        "Process",
        "Arrive",
        "Burst",
        "Start",
        "Complete",
        "Turnaround",
        "Wait",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h == "Process" else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        color = colors.color_for(p.pid)
        proc_table.add_row(
            f"[bold {color}]{p.name}[/bold {color}]",
            str(p.arrival_time),
            str(p.burst_time),
            str(p.start_time),
            str(p.completion_time),
            str(p.turnaround_time),
            str(p.waiting_time),
        )

    console.print(proc_table)
    console.print()

    avg_table = Table(title="Averages", box=box.SIMPLE_HEAVY)
    avg_table.add_column("Metric")
    avg_table.add_column("Value", justify="right")
    avg_table.add_row("Avg turnaround", format_average(result.averages.mean_turnaround))
    avg_table.add_row("Avg waiting", format_average(result.averages.mean_waiting))

    if result.system:
        sys = result.system
        avg_table.add_row("Makespan", str(sys.makespan))
        avg_table.add_row("Idle time", str(sys.idle_time))
        avg_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        avg_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

    console.print(avg_table)


def _animate_result(result: ScheduleResult, delay: float, console: Optional[Console] = None) -> None:
    """
    Simple time-stepped textual simulation using the computed schedule.
    """
    console = console or Console()
    timeline = result.timeline
    if not timeline:
        console.print("[red]No execution to animate.[/red]")
        return

    makespan = timeline[-1].completion_time
    console.print(f"[bold]Simulating {result.algorithm}[/bold] (duration {makespan} time units)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    for t in range(makespan):
        running = next((sl for sl in timeline if sl.start_time <= t < sl.completion_time), None)
        if running is None:
            console.print(f"t={t:2d}: [dim]idle[/dim]")
        else:
            bar = "█" * (t - running.start_time + 1)
            console.print(f"t={t:2d}: {running.name} [green]{bar}[/green]")
        time.sleep(delay)


def _print_process_list(table: ProcessTable, colors: ColorMap, console: Console) -> None:
    if not len(table):
        console.print("[dim]No processes added yet. Add a process to get started.[/dim]")
        return

    listing = Table(title="Processes", box=box.SIMPLE_HEAVY)
    listing.add_column("ID", justify="right")
    listing.add_column("Process", justify="center")
    listing.add_column("Arrival", justify="right")
    listing.add_column("Burst", justify="right")
    for p in table:
        color = colors.color_for(p.pid)
        listing.add_row(p.pid, f"[bold {color}]{p.name}[/bold {color}]", str(p.arrival_time), str(p.burst_time))
    console.print(listing)


def _interactive_menu(table: ProcessTable, scale: int, console: Optional[Console] = None) -> None:
    console = console or Console()
    colors = ColorMap()

    actions = [
        ("a", "Add process"),
        ("r", "Remove process"),
        ("c", "Clear all processes"),
        ("l", "List processes"),
        ("w", "Load workload file"),
        ("s", "Save workload file"),
        ("x", "Calculate schedule"),
        ("q", "Quit"),
    ]

    while True:
        console.print("\n[bold cyan]SJF Scheduler Menu[/bold cyan] [dim](q to quit)[/dim]")
        console.print(f"[bold]Processes:[/bold] [green]{len(table)}[/green]")
        for key, label in actions:
            console.print(f"  [yellow]{key}[/yellow]. [white]{label}[/white]")

        choice = input("Choice: ").strip().lower()
        if choice in {"q", "quit", "exit"}:
            return

        if choice == "a":
            name = input("Process name [auto]: ")
            arrival = input("Arrival time [0]: ")
            burst = input("Burst time: ")
            try:
                process = table.add(burst, arrival, name=name)
            except SchedulerError as exc:
                console.print(f"[red]{exc}[/red]")
                continue
            console.print(f"Added [bold]{process.name}[/bold] (id {process.pid}).")
            continue

        if choice == "r":
            _print_process_list(table, colors, console)
            pid = input("Process id to remove: ").strip()
            try:
                table.remove(pid)
            except KeyError:
                console.print(f"[red]No process with id {pid!r}.[/red]")
                continue
            colors.forget(pid)
            continue

        if choice == "c":
            if not len(table):
                continue
            confirm = input("Are you sure you want to clear all processes? [y/N]: ").strip().lower()
            if confirm == "y":
                table.clear()
                colors = ColorMap()
            continue

        if choice == "l":
            _print_process_list(table, colors, console)
            continue

        if choice == "w":
            path_in = input("Workload path: ").strip()
            try:
                loaded = load_workload(Path(path_in))
            except (OSError, SchedulerError) as exc:
                console.print(f"[red]Error: {exc}[/red]")
                continue
            table = loaded
            colors = ColorMap()
            _print_process_list(table, colors, console)
            continue

        if choice == "s":
            path_in = input("Save to: ").strip()
            try:
                save_workload(table, Path(path_in))
            except OSError as exc:
                console.print(f"[red]Error: {exc}[/red]")
            continue

        if choice == "x":
            try:
                result = table.schedule()
            except SchedulerError as exc:
                console.print(f"[red]{exc}[/red]")
                continue
            _print_result(result, console=console, colors=colors, scale=scale)
            continue

        console.print("[red]Invalid selection.[/red]")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    if args.scale <= 0:
        parser.error("--scale must be a positive integer")

    try:
        if args.command == "run":
            table = load_workload(Path(args.workload))
            result = run_algorithm("sjf", table.processes())
            if args.step:
                try:
                    _animate_result(result, delay=args.step_delay, console=console)
                except KeyboardInterrupt:
                    console.print("[yellow]Animation skipped.[/yellow]")
            _print_result(result, console=console, scale=args.scale)
            return 0

        if args.command == "menu":
            table = load_workload(Path(args.workload)) if args.workload else ProcessTable()
            _interactive_menu(table, scale=args.scale, console=console)
            return 0
    except (OSError, SchedulerError) as exc:
        logger.debug("input rejected", exc_info=True)
        console.print(f"[red]Error: {exc}[/red]")
        return EXIT_INPUT_ERROR

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
