"""Unit tests for the ResultAccumulator."""

import threading
from datetime import datetime, timezone

import pytest

from enhanced_reporter.results import (
    ReporterError,
    ResultAccumulator,
    RunStateError,
    TestRecord,
    format_completion_line,
    resolve_suite_name,
)
from tests.reporter_test_helpers import RUN_START, expect_step, make_result, make_test


# ==================== Suite Name Tests ====================


class TestResolveSuiteName:
    """Tests for resolve_suite_name()."""

    def test_prefers_describe_title(self):
        """Test the enclosing describe block names the group."""
        assert resolve_suite_name(make_test("logs in", parent_title="Auth")) == "Auth"

    @pytest.mark.parametrize(
        "file,expected",
        [
            ("tests/user-login.spec.js", "user login"),
            ("e2e/check-out-flow.spec.ts", "check out flow"),
            ("cart.test.js", "cart"),
            ("helpers/odd-name.js", "odd name.js"),
        ],
    )
    def test_falls_back_to_file_name(self, file, expected):
        """Test the file name is used when there is no describe block."""
        test = make_test("t", parent_title=None, file=file)

        assert resolve_suite_name(test) == expected


# ==================== Accumulator Tests ====================


class TestResultAccumulator:
    """Tests for ResultAccumulator."""

    def test_builds_record(self, tmp_path):
        """Test a finished test becomes a normalized TestRecord."""
        accumulator = ResultAccumulator(root_dir=tmp_path)
        test = make_test("logs in", file=str(tmp_path / "tests" / "login.spec.js"), line=14)
        result = make_result(
            steps=[expect_step("Expect toHaveURL"), expect_step("Expect toBeVisible")],
            duration=340,
        )

        record = accumulator.record_test_end(test, result)

        assert record.test_name == "logs in"
        assert record.result == "passed"
        assert record.duration == 340
        assert [a.description for a in record.assertions] == ["toHaveURL", "toBeVisible"]
        assert record.retries is None
        assert record.browser == "chromium"
        assert record.file == "tests/login.spec.js"
        assert record.line == 14

    def test_retry_info_only_for_retries(self):
        """Test retries reads 'retry/limit' only when the attempt was a retry."""
        accumulator = ResultAccumulator()
        test = make_test("flaky", retries=2)

        first = accumulator.record_test_end(test, make_result("failed", retry=0))
        second = accumulator.record_test_end(test, make_result("passed", retry=1))

        assert first.retries is None
        assert second.retries == "1/2"

    def test_unknown_browser(self):
        """Test a missing project name is labeled unknown."""
        record = ResultAccumulator().record_test_end(
            make_test("t", project_name=None), make_result()
        )

        assert record.browser == "unknown"

    def test_start_time_from_test_begin(self):
        """Test the recorded begin time wins over the host's start time."""
        accumulator = ResultAccumulator()
        test = make_test("t")
        began = datetime(2026, 3, 2, 9, 0, 5, tzinfo=timezone.utc)

        accumulator.record_test_start(test, began)
        record = accumulator.record_test_end(test, make_result())

        assert record.start_time == began

    def test_start_time_falls_back_to_result(self):
        """Test the host's start time is used without a begin event."""
        record = ResultAccumulator().record_test_end(make_test("t"), make_result())

        assert record.start_time == RUN_START

    def test_group_and_test_order(self):
        """Test groups keep first-seen order and tests keep completion order."""
        accumulator = ResultAccumulator()
        accumulator.record_test_end(make_test("b1", parent_title="B"), make_result())
        accumulator.record_test_end(make_test("a1", parent_title="A"), make_result())
        accumulator.record_test_end(make_test("b2", parent_title="B"), make_result())

        groups = accumulator.groups

        assert [g.name for g in groups] == ["B", "A"]
        assert [t.test_name for t in groups[0].tests] == ["b1", "b2"]
        assert accumulator.total_tests == 3

    def test_rejects_results_after_seal(self):
        """Test no results are accepted once the run is finalized."""
        accumulator = ResultAccumulator()
        accumulator.record_test_end(make_test("t"), make_result())
        groups = accumulator.seal()

        with pytest.raises(RunStateError):
            accumulator.record_test_end(make_test("late"), make_result())

        assert accumulator.is_sealed is True
        assert len(groups[0].tests) == 1

    def test_seal_twice(self):
        """Test sealing an already sealed accumulator is an error."""
        accumulator = ResultAccumulator()
        accumulator.seal()

        with pytest.raises(RunStateError, match="already been finalized"):
            accumulator.seal()

    def test_state_error_is_reporter_error(self):
        """Test lifecycle errors share the ReporterError base and carry a reason."""
        accumulator = ResultAccumulator()
        accumulator.seal()

        with pytest.raises(ReporterError) as exc_info:
            accumulator.seal()

        assert isinstance(exc_info.value, RunStateError)
        assert exc_info.value.reason == "run has already been finalized"

    def test_concurrent_appends_are_not_lost(self):
        """Test parallel completions all land in their groups."""
        accumulator = ResultAccumulator()

        def worker(suite):
            for i in range(200):
                accumulator.record_test_end(
                    make_test(f"{suite}-{i}", parent_title=suite), make_result()
                )

        threads = [threading.Thread(target=worker, args=(f"S{n}",)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        groups = {g.name: g for g in accumulator.groups}
        assert accumulator.total_tests == 800
        for suite, group in groups.items():
            assert [t.test_name for t in group.tests] == [f"{suite}-{i}" for i in range(200)]


class TestFormatCompletionLine:
    """Tests for format_completion_line()."""

    def test_first_attempt(self):
        """Test the console line for a first attempt."""
        line = format_completion_line(make_test("logs in"), make_result(duration=88), 2)

        assert line == "✅ logs in (88ms) - 2 assertions"

    def test_retry(self):
        """Test the console line mentions the retry index."""
        line = format_completion_line(
            make_test("logs in"), make_result("failed", duration=90, retry=1), 0
        )

        assert line == "❌ logs in (90ms) (retry 1) - 0 assertions"


class TestTestRecord:
    """Tests for the TestRecord model."""

    def test_to_dict_shape(self):
        """Test serialization uses the report's field names and order."""
        record = TestRecord(test_name="t", result="passed", duration=12, start_time=RUN_START)

        data = record.to_dict()

        assert list(data) == [
            "testName",
            "result",
            "duration",
            "assertions",
            "retries",
            "browser",
            "startTime",
            "file",
            "line",
        ]
        assert data["duration"] == "12ms"
        assert data["startTime"] == "2026-03-02T09:00:00+00:00"

    def test_from_dict(self):
        """Test deserialization of a report test entry."""
        record = TestRecord.from_dict(
            {
                "testName": "t",
                "result": "failed",
                "duration": "45ms",
                "assertions": [{"name": "toBe", "status": "failed", "emoji": "❌", "duration": 1}],
                "retries": "1/2",
                "browser": "firefox",
                "startTime": "2026-03-02T09:00:00+00:00",
                "file": "a.spec.js",
                "line": 3,
            }
        )

        assert record.duration == 45
        assert record.retries == "1/2"
        assert record.failed_assertions[0].description == "toBe"
        assert record.start_time == RUN_START
