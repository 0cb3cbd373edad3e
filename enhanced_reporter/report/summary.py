"""Summary statistics derived from the finalized suite groups."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from enhanced_reporter.host.models import as_utc
from enhanced_reporter.results.models import SuiteGroup
from enhanced_reporter.results.status import FAILED, PASSED, SKIPPED, TIMED_OUT

from .models import RunSummary


def _fixed(value: float, places: int) -> str:
    # Ties round away from zero, matching the JavaScript reporters' toFixed()
    exponent = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))


def format_success_rate(passed: int, total: int) -> str:
    """Format the passed share as a percentage with one decimal.

    >>> format_success_rate(3, 4)
    '75.0%'
    >>> format_success_rate(1, 16)
    '6.3%'
    >>> format_success_rate(0, 0)
    '0%'
    """
    if total == 0:
        return "0%"
    return f"{_fixed(passed / total * 100, 1)}%"


def format_run_duration(started_at: Optional[datetime], finished_at: Optional[datetime]) -> str:
    """Format elapsed seconds between run start and end, e.g. ``"3.25s"``."""
    if started_at is None or finished_at is None:
        return "0.00s"
    seconds = (as_utc(finished_at) - as_utc(started_at)).total_seconds()
    return f"{_fixed(seconds, 2)}s"


def calculate_summary(
    groups: Iterable[SuiteGroup],
    started_at: Optional[datetime],
    finished_at: Optional[datetime],
) -> RunSummary:
    """Compute the run summary in a single pass over all records.

    Statuses outside passed/failed/skipped/timedOut count toward the total
    only. A test counts once toward ``total_retries`` if it was a retry.

    Args:
        groups: Finalized suite groups.
        started_at: Run start time.
        finished_at: Run end time.

    Returns:
        RunSummary for the run.
    """
    counts = {PASSED: 0, FAILED: 0, SKIPPED: 0, TIMED_OUT: 0}
    total_tests = 0
    total_assertions = 0
    total_retries = 0

    for group in groups:
        for record in group.tests:
            total_tests += 1
            total_assertions += len(record.assertions)
            if record.retries:
                total_retries += 1
            if record.result in counts:
                counts[record.result] += 1

    return RunSummary(
        total_tests=total_tests,
        passed=counts[PASSED],
        failed=counts[FAILED],
        skipped=counts[SKIPPED],
        timed_out=counts[TIMED_OUT],
        total_assertions=total_assertions,
        total_retries=total_retries,
        duration=format_run_duration(started_at, finished_at),
        success_rate=format_success_rate(counts[PASSED], total_tests),
    )
