"""Exceptions for the report module."""


class ReportError(Exception):
    """Base exception for report errors."""

    pass


class ReportWriteError(ReportError):
    """Raised when the report file cannot be written."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write report to {path}: {reason}")
