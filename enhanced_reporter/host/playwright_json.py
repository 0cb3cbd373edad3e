"""Replay a Playwright JSON report through an EnhancedReporter.

Playwright's built-in ``json`` reporter writes the whole run as nested
suites: file suites at the top, ``describe`` suites below them, specs
inside suites, one test per project inside each spec, and one result per
attempt inside each test.
"""

import json
import logging
import os
from datetime import timedelta
from pathlib import Path
from typing import Any, Iterator, Optional

from .exceptions import ReportLoadError
from .models import TestCase, TestLocation, TestResult, parse_timestamp

logger = logging.getLogger(__name__)


def load_playwright_report(path: Path) -> dict[str, Any]:
    """Read a Playwright JSON report from disk.

    Raises:
        ReportLoadError: If the file is missing, unreadable or not a JSON object.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ReportLoadError(path, str(e)) from e
    except json.JSONDecodeError as e:
        raise ReportLoadError(path, f"invalid JSON: {e}") from e

    if not isinstance(data, dict) or "suites" not in data:
        raise ReportLoadError(path, "not a Playwright JSON report")
    return data


def _iter_attempts(
    suite: dict[str, Any],
    parent_title: Optional[str],
    root_dir: str,
    retries_by_project: dict[str, int],
) -> Iterator[tuple[TestCase, TestResult]]:
    for spec in suite.get("specs", []):
        file = spec.get("file") or suite.get("file", "")
        if root_dir and file and not os.path.isabs(file):
            file = os.path.join(root_dir, file)
        location = TestLocation(file=file, line=spec.get("line", 0), column=spec.get("column", 0))

        for test in spec.get("tests", []):
            project = test.get("projectName") or None
            case = TestCase(
                title=spec.get("title", ""),
                location=location,
                parent_title=parent_title,
                project_name=project,
                retries=retries_by_project.get(project, 0),
                id=f"{spec.get('id', '')}:{test.get('projectId', project)}",
            )
            for result in test.get("results", []):
                yield case, TestResult.from_dict(result)

    for child in suite.get("suites", []):
        yield from _iter_attempts(child, child.get("title") or None, root_dir, retries_by_project)


def iter_playwright_attempts(data: dict[str, Any]) -> Iterator[tuple[TestCase, TestResult]]:
    """Yield ``(TestCase, TestResult)`` for every attempt in report order.

    Specs directly under a file suite get no parent title, so they are
    grouped by file name.
    """
    config = data.get("config", {})
    root_dir = config.get("rootDir", "")
    retries_by_project = {
        p.get("name"): p.get("retries", 0) for p in config.get("projects", [])
    }
    for file_suite in data.get("suites", []):
        yield from _iter_attempts(file_suite, None, root_dir, retries_by_project)


def replay_playwright_report(data: dict[str, Any], reporter):
    """Drive a reporter through every event recorded in a Playwright report.

    Args:
        data: Parsed Playwright JSON report.
        reporter: EnhancedReporter to feed.

    Returns:
        The reporter's RunOutcome.
    """
    attempts = list(iter_playwright_attempts(data))
    total_tests = len({case.id for case, _ in attempts})

    stats = data.get("stats", {})
    started_at = parse_timestamp(stats.get("startTime"))
    finished_at = None
    if started_at is not None and stats.get("duration") is not None:
        finished_at = started_at + timedelta(milliseconds=float(stats["duration"]))

    logger.debug("Replaying %d attempts of %d tests", len(attempts), total_tests)
    reporter.on_begin(total_tests, started_at=started_at)
    for case, result in attempts:
        reporter.on_test_begin(case, started_at=result.start_time)
        reporter.on_test_end(case, result)
    return reporter.on_end(finished_at=finished_at)
