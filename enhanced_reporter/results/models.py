"""Data models for accumulated test results."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from .status import FAILED, PASSED

ASSERTION_PASSED_ICON = "✅"
ASSERTION_FAILED_ICON = "❌"


@dataclass(frozen=True)
class AssertionOutcome:
    """A single verified expectation extracted from a step tree.

    Attributes:
        description: Cleaned step title.
        passed: True when the step carried no error.
        duration: Elapsed time in milliseconds.
    """

    description: str
    passed: bool
    duration: int = 0

    @property
    def status(self) -> str:
        return PASSED if self.passed else FAILED

    @property
    def emoji(self) -> str:
        return ASSERTION_PASSED_ICON if self.passed else ASSERTION_FAILED_ICON

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the report's assertion entry."""
        return {
            "name": self.description,
            "status": self.status,
            "emoji": self.emoji,
            "duration": self.duration,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AssertionOutcome":
        """Deserialize from a report assertion entry."""
        return cls(
            description=data["name"],
            passed=data.get("status") == PASSED,
            duration=data.get("duration", 0),
        )


@dataclass(frozen=True)
class TestRecord:
    """Normalized record of one completed test attempt.

    Attributes:
        test_name: Test title.
        result: Status string (see ``status`` module); unrecognized values kept as-is.
        duration: Elapsed time in milliseconds.
        assertions: Assertions in step traversal order.
        retries: ``"{retry}/{limit}"`` when the attempt was a retry, else None.
        browser: Project (browser/environment) label.
        file: Source path relative to the working directory.
        line: Source line of the test declaration.
        start_time: When the test started.
    """

    __test__ = False

    test_name: str
    result: str
    duration: int = 0
    assertions: tuple[AssertionOutcome, ...] = ()
    retries: Optional[str] = None
    browser: str = "unknown"
    file: str = ""
    line: int = 0
    start_time: Optional[datetime] = None

    @property
    def failed_assertions(self) -> list[AssertionOutcome]:
        return [a for a in self.assertions if not a.passed]

    @property
    def passed_assertions(self) -> list[AssertionOutcome]:
        return [a for a in self.assertions if a.passed]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the report's test entry."""
        return {
            "testName": self.test_name,
            "result": self.result,
            "duration": f"{self.duration}ms",
            "assertions": [a.to_dict() for a in self.assertions],
            "retries": self.retries,
            "browser": self.browser,
            "startTime": self.start_time.isoformat() if self.start_time else None,
            "file": self.file,
            "line": self.line,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TestRecord":
        """Deserialize from a report test entry."""
        start_time = None
        if data.get("startTime"):
            start_time = datetime.fromisoformat(data["startTime"])
        return cls(
            test_name=data["testName"],
            result=data["result"],
            duration=int(str(data.get("duration", "0ms")).removesuffix("ms") or 0),
            assertions=tuple(
                AssertionOutcome.from_dict(a) for a in data.get("assertions", [])
            ),
            retries=data.get("retries"),
            browser=data.get("browser", "unknown"),
            file=data.get("file", ""),
            line=data.get("line", 0),
            start_time=start_time,
        )


@dataclass
class SuiteGroup:
    """Tests sharing a group name, in completion order."""

    name: str
    tests: list[TestRecord] = field(default_factory=list)

    def count(self, status: str) -> int:
        """Number of tests in this group with the given status."""
        return sum(1 for t in self.tests if t.result == status)

    def to_list(self) -> list[dict[str, Any]]:
        return [t.to_dict() for t in self.tests]
