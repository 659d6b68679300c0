from __future__ import annotations


class SchedulingError(ValueError):
    """Base class for errors raised by the simulation engine."""


class InvalidProcessError(SchedulingError):
    def __init__(self, pid: str, reason: str) -> None:
        super().__init__(f"Invalid process {pid!r}: {reason}")
        self.pid = pid
        self.reason = reason


class DuplicateProcessIdError(SchedulingError):
    def __init__(self, pid: str) -> None:
        super().__init__(f"Duplicate process id {pid!r}")
        self.pid = pid


class UnknownAlgorithmError(SchedulingError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown or unimplemented algorithm '{name}'")
        self.name = name


class WorkloadError(ValueError):
    """Raised when a workload file cannot be parsed into processes."""
