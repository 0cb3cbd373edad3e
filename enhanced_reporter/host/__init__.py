"""Host test framework events and report replay.

Public API:
    ExecutionStep: One reported step, with nested children.
    TestCase: A declared test.
    TestResult: The outcome of one attempt at a test.
    TestLocation: Source position.
    as_utc: Normalize a datetime to aware UTC.
    load_playwright_report: Read a Playwright JSON report.
    iter_playwright_attempts: Convert a report into (TestCase, TestResult) pairs.
    replay_playwright_report: Feed a report through an EnhancedReporter.
    HostError: Base exception for module errors.
    ReportLoadError: Raised when a report file cannot be loaded.
"""

from .exceptions import HostError, ReportLoadError
from .models import (
    ExecutionStep,
    TestCase,
    TestLocation,
    TestResult,
    as_utc,
    parse_timestamp,
)
from .playwright_json import (
    iter_playwright_attempts,
    load_playwright_report,
    replay_playwright_report,
)

__all__ = [
    "ExecutionStep",
    "TestCase",
    "TestResult",
    "TestLocation",
    "parse_timestamp",
    "as_utc",
    "load_playwright_report",
    "iter_playwright_attempts",
    "replay_playwright_report",
    "HostError",
    "ReportLoadError",
]
