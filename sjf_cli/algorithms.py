from __future__ import annotations

import heapq
import logging
from typing import Dict, List, Sequence, Tuple

from .errors import DuplicateProcessError, EmptyInputError, InvalidArrivalTimeError, InvalidBurstTimeError
from .metrics import compute_averages, compute_system_metrics
from .models import Process, ScheduleResult, ScheduledSlot

logger = logging.getLogger(__name__)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_processes(processes: Sequence[Process]) -> None:
    """
    Check the preconditions the scheduler relies on.

    Raises EmptyInputError, InvalidBurstTimeError, InvalidArrivalTimeError or
    DuplicateProcessError for the first problem found.
    """
    if not processes:
        raise EmptyInputError()

    seen: set[str] = set()
    for p in processes:
        if not _is_int(p.burst_time) or p.burst_time <= 0:
            raise InvalidBurstTimeError(p.burst_time, p.name)
        if not _is_int(p.arrival_time) or p.arrival_time < 0:
            raise InvalidArrivalTimeError(p.arrival_time, p.name)
        if p.pid in seen:
            raise DuplicateProcessError(p.pid)
        seen.add(p.pid)


def schedule_sjf(processes: Sequence[Process]) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    Processes wait in one of two states: not yet arrived (ordered by arrival)
    or ready (a min-heap). At each decision point every arrived process is
    moved to the ready heap and the one with the smallest burst time runs to
    completion. Ties go to the earlier arrival, then to the earlier position
    in the input. If nothing is ready the clock jumps to the next arrival.
    """
    validate_processes(processes)

    # Pending processes, ordered (arrival, burst, input position).
    pending: List[Tuple[int, Process]] = sorted(
        enumerate(processes),
        key=lambda item: (item[1].arrival_time, item[1].burst_time, item[0]),
    )
    ready: List[Tuple[int, int, int, Process]] = []
    next_pending = 0

    time = 0
    timeline: List[ScheduledSlot] = []
    position: Dict[str, int] = {}

    while next_pending < len(pending) or ready:
        while next_pending < len(pending) and pending[next_pending][1].arrival_time <= time:
            index, p = pending[next_pending]
            heapq.heappush(ready, (p.burst_time, p.arrival_time, index, p))
            next_pending += 1

        if not ready:
            # CPU idle: jump to the next arrival.
            next_arrival = pending[next_pending][1].arrival_time
            logger.debug("idle from t=%d to t=%d", time, next_arrival)
            time = next_arrival
            continue

        _, _, index, p = heapq.heappop(ready)

        start_time = time
        completion_time = start_time + p.burst_time
        turnaround_time = completion_time - p.arrival_time
        waiting_time = turnaround_time - p.burst_time

        logger.debug("dispatch %s at t=%d (burst %d)", p.pid, start_time, p.burst_time)

        timeline.append(
            ScheduledSlot(
                pid=p.pid,
                name=p.name,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                start_time=start_time,
                completion_time=completion_time,
                turnaround_time=turnaround_time,
                waiting_time=waiting_time,
            )
        )
        position[p.pid] = index
        time = completion_time

    # Table order follows submission order; the timeline stays chronological.
    metrics = sorted(timeline, key=lambda slot: position[slot.pid])

    result = ScheduleResult(
        algorithm="SJF (non-preemptive)",
        timeline=timeline,
        processes=metrics,
        averages=compute_averages(metrics),
    )
    compute_system_metrics(result)
    return result


ALGORITHMS = {
    "sjf": schedule_sjf,
}


def run_algorithm(name: str, processes: Sequence[Process]) -> ScheduleResult:
    """
    Dispatch to the requested algorithm by name.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown or unimplemented algorithm '{name}'")

    func = ALGORITHMS[name]
    return func(processes)
