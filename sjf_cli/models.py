from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    pid: str
    name: str
    arrival_time: int
    burst_time: int


@dataclass
class ScheduledSlot:
    """
    One process's single, uninterrupted run on the CPU plus its timing metrics.
    """

    pid: str
    name: str
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    turnaround_time: int
    waiting_time: int

    def width(self, scale: int = 1) -> int:
        """Visual width of the slot in a Gantt chart."""
        return max(1, self.burst_time * scale)


@dataclass
class Averages:
    mean_turnaround: float
    mean_waiting: float


@dataclass
class SystemMetrics:
    makespan: int
    cpu_busy_time: int
    idle_time: int
    cpu_utilization: float
    throughput: float


@dataclass
class ScheduleResult:
    algorithm: str
    timeline: List[ScheduledSlot] = field(default_factory=list)
    processes: List[ScheduledSlot] = field(default_factory=list)
    averages: Averages = field(default_factory=lambda: Averages(0.0, 0.0))
    system: Optional[SystemMetrics] = None

    def slot_for(self, pid: str) -> ScheduledSlot:
        for slot in self.processes:
            if slot.pid == pid:
                return slot
        raise KeyError(pid)
