"""Exceptions for the host module."""


class HostError(Exception):
    """Base exception for host event errors."""

    pass


class ReportLoadError(HostError):
    """Raised when a host report file cannot be read or parsed."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to load test report {path}: {reason}")
