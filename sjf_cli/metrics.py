from __future__ import annotations

from typing import Sequence

from .models import Averages, ScheduledSlot, ScheduleResult, SystemMetrics


def compute_averages(slots: Sequence[ScheduledSlot]) -> Averages:
    """
    Arithmetic means of turnaround and waiting time. Values are not rounded.
    """
    if not slots:
        return Averages(mean_turnaround=0.0, mean_waiting=0.0)

    n = len(slots)
    return Averages(
        mean_turnaround=sum(s.turnaround_time for s in slots) / n,
        mean_waiting=sum(s.waiting_time for s in slots) / n,
    )


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute makespan, idle time, throughput and CPU utilization from the
    timeline and attach them to the result.
    """
    if not result.timeline:
        system = SystemMetrics(makespan=0, cpu_busy_time=0, idle_time=0, cpu_utilization=0.0, throughput=0.0)
        result.system = system
        return system

    makespan = max(s.completion_time for s in result.timeline)
    cpu_busy_time = sum(s.burst_time for s in result.timeline)

    system = SystemMetrics(
        makespan=makespan,
        cpu_busy_time=cpu_busy_time,
        idle_time=makespan - cpu_busy_time,
        cpu_utilization=cpu_busy_time / makespan,
        throughput=len(result.timeline) / makespan,
    )
    result.system = system
    return system


def format_average(value: float) -> str:
    return f"{value:.2f}"
