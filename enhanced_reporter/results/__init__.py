"""Result accumulation for completed tests.

Turns host test-end events into normalized TestRecords grouped by suite,
extracting assertion outcomes from each attempt's step tree.

Public API:
    ResultAccumulator: Collects records into ordered suite groups.
    extract_assertions: Flatten a step tree into AssertionOutcomes.
    clean_assertion_name: Tidy a raw assertion step title.
    get_status_icon: Display icon for a status string.
    resolve_suite_name: Group name for a test.
    AssertionOutcome: One assertion's result.
    TestRecord: One completed test attempt.
    SuiteGroup: Named, ordered list of TestRecords.
    ReporterError: Base exception for module errors.
    RunStateError: Raised for events after finalization.
"""

from .accumulator import ResultAccumulator, format_completion_line, resolve_suite_name
from .assertions import clean_assertion_name, extract_assertions, is_assertion
from .exceptions import ReporterError, RunStateError
from .models import AssertionOutcome, SuiteGroup, TestRecord
from .status import STATUS_ICONS, UNKNOWN_ICON, get_status_icon

__all__ = [
    "ResultAccumulator",
    "format_completion_line",
    "resolve_suite_name",
    "extract_assertions",
    "clean_assertion_name",
    "is_assertion",
    "get_status_icon",
    "STATUS_ICONS",
    "UNKNOWN_ICON",
    "AssertionOutcome",
    "TestRecord",
    "SuiteGroup",
    "ReporterError",
    "RunStateError",
]
