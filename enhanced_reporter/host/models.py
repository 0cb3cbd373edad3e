"""Event shapes handed to the reporter by the host test framework."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return an aware UTC datetime; naive values are taken to be UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp (``Z`` suffix allowed), passing datetimes through."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _to_ms(value: Any) -> int:
    if value is None:
        return 0
    try:
        return max(int(round(float(value))), 0)
    except (TypeError, ValueError):
        return 0


@dataclass
class TestLocation:
    """Source position of a test or step.

    Attributes:
        file: Path to the source file.
        line: 1-based line number.
        column: 1-based column number.
    """

    __test__ = False

    file: str = ""
    line: int = 0
    column: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"file": self.file, "line": self.line, "column": self.column}

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "TestLocation":
        """Deserialize from dictionary."""
        data = data or {}
        return cls(
            file=data.get("file", ""),
            line=data.get("line", 0),
            column=data.get("column", 0),
        )


@dataclass
class ExecutionStep:
    """One reported action during a test, with nested child steps.

    Attributes:
        title: Human-readable description, e.g. ``expect(locator).toBeVisible``.
        category: Free-form tag set by the host; ``"expect"`` marks assertions.
        error: Error message if the step failed, None otherwise.
        duration: Elapsed time in milliseconds.
        location: Where the step was issued from, if known.
        steps: Ordered child steps.
    """

    title: str
    category: Optional[str] = None
    error: Optional[str] = None
    duration: int = 0
    location: Optional[TestLocation] = None
    steps: list["ExecutionStep"] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "title": self.title,
            "category": self.category,
            "error": self.error,
            "duration": self.duration,
            "location": self.location.to_dict() if self.location else None,
            "steps": [s.to_dict() for s in self.steps],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExecutionStep":
        """Deserialize from dictionary.

        Accepts the step shape of Playwright's JSON reporter, where ``error``
        is an object with a ``message`` and ``category`` is usually absent.
        """
        error = data.get("error")
        if isinstance(error, dict):
            error = error.get("message") or error.get("value") or "error"
        elif error is not None:
            error = str(error)

        location = None
        if data.get("location"):
            location = TestLocation.from_dict(data["location"])

        return cls(
            title=data.get("title") or "",
            category=data.get("category"),
            error=error,
            duration=_to_ms(data.get("duration")),
            location=location,
            steps=[cls.from_dict(s) for s in data.get("steps") or []],
        )


@dataclass
class TestCase:
    """A test as declared in the source files.

    Attributes:
        title: Test title.
        location: Where the test is declared.
        parent_title: Title of the enclosing ``describe`` block, if any.
        project_name: Name of the browser/environment project running it.
        retries: Retry limit configured for the test.
        id: Stable identifier used to pair begin and end events.
    """

    __test__ = False

    title: str
    location: TestLocation = field(default_factory=TestLocation)
    parent_title: Optional[str] = None
    project_name: Optional[str] = None
    retries: int = 0
    id: str = ""

    def __post_init__(self):
        if not self.id:
            self.id = f"{self.location.file}:{self.location.line}:{self.title}"


@dataclass
class TestResult:
    """Outcome of one attempt at running a TestCase.

    Attributes:
        status: One of passed, failed, skipped, timedOut, interrupted.
            Other values are carried through untouched.
        duration: Elapsed time in milliseconds.
        retry: Attempt index; 0 for the first run.
        start_time: When the attempt started, as reported by the host.
        steps: Top-level steps of the attempt.
    """

    __test__ = False

    status: str
    duration: int = 0
    retry: int = 0
    start_time: Optional[datetime] = None
    steps: list[ExecutionStep] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TestResult":
        """Deserialize from a Playwright JSON reporter result entry."""
        return cls(
            status=data.get("status", "unknown"),
            duration=_to_ms(data.get("duration")),
            retry=data.get("retry", 0) or 0,
            start_time=parse_timestamp(data.get("startTime")),
            steps=[ExecutionStep.from_dict(s) for s in data.get("steps") or []],
        )
