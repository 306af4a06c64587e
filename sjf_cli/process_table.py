from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Set

from .algorithms import schedule_sjf
from .errors import DuplicateProcessError, EmptyInputError, InvalidArrivalTimeError, InvalidBurstTimeError
from .models import Process, ScheduleResult

logger = logging.getLogger(__name__)


def _parse_int(value: object) -> Optional[int]:
    """
    Parse user input into an int. Returns None for blank input and raises
    ValueError for anything that is not a whole number.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    return int(text)


def parse_burst_time(value: object, name: Optional[str] = None) -> int:
    try:
        burst = _parse_int(value)
    except ValueError as exc:
        raise InvalidBurstTimeError(value, name) from exc
    if burst is None or burst <= 0:
        raise InvalidBurstTimeError(value, name)
    return burst


def parse_arrival_time(value: object, name: Optional[str] = None) -> int:
    """Blank arrival means the process is there from the start (t=0)."""
    try:
        arrival = _parse_int(value)
    except ValueError as exc:
        raise InvalidArrivalTimeError(value, name) from exc
    if arrival is None:
        return 0
    if arrival < 0:
        raise InvalidArrivalTimeError(value, name)
    return arrival


class ProcessTable:
    """
    Editable, insertion-ordered collection of processes keyed by id.

    Ids come from a counter that only moves forward, so a removed id is never
    handed out again. Default names (P1, P2, ...) use a separate counter that
    restarts when the table is cleared.
    """

    def __init__(self) -> None:
        self._processes: Dict[str, Process] = {}
        self._next_id = 1
        self._name_counter = 1
        self._reserved: Set[str] = set()

    def __len__(self) -> int:
        return len(self._processes)

    def __iter__(self) -> Iterator[Process]:
        return iter(list(self._processes.values()))

    def __contains__(self, pid: object) -> bool:
        return pid in self._processes

    def processes(self) -> List[Process]:
        return list(self._processes.values())

    def get(self, pid: str) -> Process:
        return self._processes[pid]

    def reserve(self, pids: Iterable[str]) -> None:
        """Keep generated ids clear of ids that will be inserted later."""
        self._reserved.update(pids)

    def _new_id(self) -> str:
        while str(self._next_id) in self._processes or str(self._next_id) in self._reserved:
            self._next_id += 1
        pid = str(self._next_id)
        self._next_id += 1
        return pid

    def add(self, burst_time: object, arrival_time: object = 0, name: Optional[str] = None) -> Process:
        """
        Validate raw values and append a new process.

        The burst time is checked first; a rejected submission leaves the
        table and both counters untouched.
        """
        label = (name or "").strip() or f"P{self._name_counter}"
        burst = parse_burst_time(burst_time, label)
        arrival = parse_arrival_time(arrival_time, label)

        process = Process(pid=self._new_id(), name=label, arrival_time=arrival, burst_time=burst)
        self._processes[process.pid] = process
        self._name_counter += 1
        logger.debug("added %s (%s): arrival=%d burst=%d", process.pid, label, arrival, burst)
        return process

    def add_process(self, process: Process) -> Process:
        if process.pid in self._processes:
            raise DuplicateProcessError(process.pid)
        parse_burst_time(process.burst_time, process.name)
        parse_arrival_time(process.arrival_time, process.name)
        self._processes[process.pid] = process
        self._name_counter += 1
        return process

    def remove(self, pid: str) -> Process:
        process = self._processes.pop(pid)
        logger.debug("removed %s (%s)", pid, process.name)
        return process

    def clear(self) -> None:
        self._processes.clear()
        self._name_counter = 1

    def schedule(self) -> ScheduleResult:
        if not self._processes:
            raise EmptyInputError()
        return schedule_sjf(self.processes())
