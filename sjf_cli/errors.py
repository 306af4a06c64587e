from __future__ import annotations


class SchedulerError(ValueError):
    """Base class for input problems detected before a schedule is computed."""


class EmptyInputError(SchedulerError):
    def __init__(self, message: str = "add at least one process") -> None:
        super().__init__(message)


class InvalidBurstTimeError(SchedulerError):
    def __init__(self, value: object, name: str | None = None) -> None:
        self.value = value
        self.name = name
        target = f" for {name}" if name else ""
        super().__init__(f"Invalid burst time{target}: {value!r} (must be an integer greater than 0)")


class InvalidArrivalTimeError(SchedulerError):
    def __init__(self, value: object, name: str | None = None) -> None:
        self.value = value
        self.name = name
        target = f" for {name}" if name else ""
        super().__init__(f"Invalid arrival time{target}: {value!r} (must be an integer >= 0)")


class DuplicateProcessError(SchedulerError):
    def __init__(self, pid: str) -> None:
        self.pid = pid
        super().__init__(f"Duplicate process id: {pid!r}")


class WorkloadFormatError(SchedulerError):
    """Raised when a workload file or one of its entries cannot be read."""
