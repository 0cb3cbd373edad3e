"""Data models for the final run report."""

import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from platform import python_version as _python_version
from typing import Any

from enhanced_reporter import __version__
from enhanced_reporter.results.models import SuiteGroup, TestRecord

REPORTER_NAME = "Enhanced Playwright Reporter"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class RunSummary:
    """Aggregate counts for one run.

    Attributes:
        total_tests: Number of recorded tests, whatever their status.
        passed: Tests with status passed.
        failed: Tests with status failed.
        skipped: Tests with status skipped.
        timed_out: Tests with status timedOut.
        total_assertions: Assertions across all tests.
        total_retries: Tests that were retry attempts (not the sum of retries).
        duration: Run wall time, e.g. ``"12.34s"``.
        timestamp: When the summary was computed.
        success_rate: Passed share, e.g. ``"75.0%"``; ``"0%"`` for an empty run.
    """

    total_tests: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    timed_out: int = 0
    total_assertions: int = 0
    total_retries: int = 0
    duration: str = "0.00s"
    timestamp: str = field(default_factory=_utc_now_iso)
    success_rate: str = "0%"

    @property
    def all_passed(self) -> bool:
        return self.passed == self.total_tests

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "totalTests": self.total_tests,
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
            "timedOut": self.timed_out,
            "totalAssertions": self.total_assertions,
            "totalRetries": self.total_retries,
            "duration": self.duration,
            "timestamp": self.timestamp,
            "successRate": self.success_rate,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RunSummary":
        """Deserialize from dictionary."""
        return cls(
            total_tests=data.get("totalTests", 0),
            passed=data.get("passed", 0),
            failed=data.get("failed", 0),
            skipped=data.get("skipped", 0),
            timed_out=data.get("timedOut", 0),
            total_assertions=data.get("totalAssertions", 0),
            total_retries=data.get("totalRetries", 0),
            duration=data.get("duration", "0.00s"),
            timestamp=data.get("timestamp", ""),
            success_rate=data.get("successRate", "0%"),
        )


@dataclass(frozen=True)
class ReportMetadata:
    """Static descriptive fields about the reporter and environment."""

    reporter_name: str = REPORTER_NAME
    version: str = __version__
    generated_at: str = field(default_factory=_utc_now_iso)
    python_version: str = field(default_factory=_python_version)
    platform: str = sys.platform

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "reporterName": self.reporter_name,
            "version": self.version,
            "generatedAt": self.generated_at,
            "pythonVersion": self.python_version,
            "platform": self.platform,
        }


@dataclass
class FinalReport:
    """The complete report written at the end of a run.

    Attributes:
        summary: Aggregate counts.
        test_suites: Suite groups in first-seen order.
        metadata: Reporter and environment details.
    """

    summary: RunSummary
    test_suites: list[SuiteGroup] = field(default_factory=list)
    metadata: ReportMetadata = field(default_factory=ReportMetadata)

    def iter_tests(self):
        """Yield ``(suite_name, record)`` pairs in report order."""
        for group in self.test_suites:
            for record in group.tests:
                yield group.name, record

    def tests_with_status(self, status: str) -> list[tuple[str, TestRecord]]:
        return [(name, t) for name, t in self.iter_tests() if t.result == status]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary, keeping suite and test order."""
        return {
            "summary": self.summary.to_dict(),
            "testSuites": {g.name: g.to_list() for g in self.test_suites},
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FinalReport":
        """Deserialize a previously written report."""
        suites = [
            SuiteGroup(name=name, tests=[TestRecord.from_dict(t) for t in tests])
            for name, tests in data.get("testSuites", {}).items()
        ]
        meta = data.get("metadata", {})
        return cls(
            summary=RunSummary.from_dict(data.get("summary", {})),
            test_suites=suites,
            metadata=ReportMetadata(
                reporter_name=meta.get("reporterName", REPORTER_NAME),
                version=meta.get("version", __version__),
                generated_at=meta.get("generatedAt", ""),
                python_version=meta.get("pythonVersion", ""),
                platform=meta.get("platform", ""),
            ),
        )
