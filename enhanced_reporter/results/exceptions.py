"""Exceptions for the results module."""


class ReporterError(Exception):
    """Base exception for reporter lifecycle errors."""

    pass


class RunStateError(ReporterError):
    """Raised when an event arrives after the run has been finalized."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid reporter state: {reason}")
