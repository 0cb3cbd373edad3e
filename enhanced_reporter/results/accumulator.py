"""ResultAccumulator for grouping completed tests into suites."""

import logging
import os
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from enhanced_reporter.host.models import TestCase, TestResult

from .assertions import extract_assertions
from .exceptions import RunStateError
from .models import SuiteGroup, TestRecord
from .status import get_status_icon

logger = logging.getLogger(__name__)

# Stripped from the file name when a test has no describe block
TEST_FILE_SUFFIXES = (".spec.js", ".spec.ts", ".test.js", ".test.ts")


def resolve_suite_name(test: TestCase) -> str:
    """Determine the group a test belongs to.

    Uses the enclosing describe block's title when there is one, otherwise
    the file name with its test suffix stripped and dashes turned into spaces
    (``user-login.spec.js`` becomes ``user login``).
    """
    if test.parent_title:
        return test.parent_title

    name = os.path.basename(test.location.file)
    for suffix in TEST_FILE_SUFFIXES:
        if name.endswith(suffix):
            name = name[: -len(suffix)]
            break
    return name.replace("-", " ")


def format_retry_info(result: TestResult, test: TestCase) -> Optional[str]:
    """Return ``"retry/limit"`` for a retried attempt, None for a first run."""
    if result.retry > 0:
        return f"{result.retry}/{test.retries}"
    return None


def format_completion_line(test: TestCase, result: TestResult, assertion_count: int) -> str:
    """Format the console line printed when a test finishes."""
    retry_info = f" (retry {result.retry})" if result.retry > 0 else ""
    return (
        f"{get_status_icon(result.status)} {test.title} "
        f"({result.duration}ms){retry_info} - {assertion_count} assertions"
    )


class ResultAccumulator:
    """Collects one TestRecord per completed test, grouped by suite.

    Group and test order follow arrival order: the first group seen is
    listed first and tests within a group appear in completion order.
    Records are never changed or removed once appended. After ``seal()``
    no further results are accepted.

    Example usage:
        accumulator = ResultAccumulator()
        accumulator.record_test_start(test)
        record = accumulator.record_test_end(test, result)
        accumulator.seal()
        for group in accumulator.groups:
            print(group.name, len(group.tests))
    """

    def __init__(self, root_dir: Optional[Path] = None):
        """Initialize an empty accumulator.

        Args:
            root_dir: Directory test file paths are made relative to.
                Defaults to the current working directory.
        """
        self._root_dir = root_dir
        self._groups: dict[str, SuiteGroup] = {}
        self._start_times: dict[str, datetime] = {}
        self._lock = threading.Lock()
        self._sealed = False

    @property
    def groups(self) -> list[SuiteGroup]:
        """Suite groups in first-seen order."""
        with self._lock:
            return list(self._groups.values())

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    @property
    def total_tests(self) -> int:
        with self._lock:
            return sum(len(g.tests) for g in self._groups.values())

    def _relative_path(self, file: str) -> str:
        if not file:
            return ""
        root = self._root_dir or Path.cwd()
        try:
            return os.path.relpath(file, root)
        except ValueError:
            # Different drive on Windows
            return file

    def record_test_start(self, test: TestCase, started_at: Optional[datetime] = None) -> None:
        """Remember when a test began.

        Args:
            test: The test that started.
            started_at: Start time; defaults to now.
        """
        self._start_times[test.id] = started_at or datetime.now(timezone.utc)

    def record_test_end(self, test: TestCase, result: TestResult) -> TestRecord:
        """Build a TestRecord for a finished test and append it to its group.

        Args:
            test: The test that finished.
            result: The attempt's outcome, including its step tree.

        Returns:
            The appended TestRecord.

        Raises:
            RunStateError: If the accumulator has been sealed.
        """
        record = TestRecord(
            test_name=test.title,
            result=result.status,
            duration=result.duration,
            assertions=tuple(extract_assertions(result.steps)),
            retries=format_retry_info(result, test),
            browser=test.project_name or "unknown",
            file=self._relative_path(test.location.file),
            line=test.location.line,
            start_time=self._start_times.pop(test.id, None) or result.start_time,
        )
        suite_name = resolve_suite_name(test)

        with self._lock:
            if self._sealed:
                raise RunStateError(
                    f"result for '{test.title}' arrived after the run was finalized"
                )
            group = self._groups.get(suite_name)
            if group is None:
                group = SuiteGroup(name=suite_name)
                self._groups[suite_name] = group
            group.tests.append(record)

        logger.debug(
            "Recorded '%s' in suite '%s'",
            test.title,
            suite_name,
            extra={"suite": suite_name, "test": test.title, "status": record.result},
        )
        return record

    def seal(self) -> list[SuiteGroup]:
        """Stop accepting results and return the final groups.

        Raises:
            RunStateError: If already sealed.
        """
        with self._lock:
            if self._sealed:
                raise RunStateError("run has already been finalized")
            self._sealed = True
            return list(self._groups.values())
