"""Unit tests for summary calculation and report rendering."""

import json
from dataclasses import replace
from datetime import timedelta
from unittest.mock import patch

import pytest

from enhanced_reporter.report import (
    FinalReport,
    ReportMetadata,
    ReportRenderer,
    ReportWriteError,
    RunSummary,
    calculate_summary,
    format_run_duration,
    format_success_rate,
)
from enhanced_reporter.results import AssertionOutcome, SuiteGroup, TestRecord
from tests.reporter_test_helpers import RUN_START


def _record(name, result="passed", assertions=0, retries=None, duration=100):
    return TestRecord(
        test_name=name,
        result=result,
        duration=duration,
        assertions=tuple(
            AssertionOutcome(description=f"check {i}", passed=result == "passed", duration=i)
            for i in range(assertions)
        ),
        retries=retries,
        file="tests/login.spec.js",
        line=1,
        start_time=RUN_START,
    )


def _fixed_report(groups):
    summary = calculate_summary(groups, RUN_START, RUN_START + timedelta(seconds=3.256))
    return FinalReport(
        summary=replace(summary, timestamp="2026-03-02T09:00:03+00:00"),
        test_suites=groups,
        metadata=ReportMetadata(
            generated_at="2026-03-02T09:00:03+00:00", python_version="3.12.0", platform="linux"
        ),
    )


# ==================== Summary Tests ====================


class TestFormatSuccessRate:
    """Tests for format_success_rate()."""

    def test_empty_run(self):
        """Test zero tests gives a bare 0%."""
        assert format_success_rate(0, 0) == "0%"

    @pytest.mark.parametrize(
        "passed,total,expected",
        [
            (3, 4, "75.0%"),
            (1, 2, "50.0%"),
            (2, 3, "66.7%"),
            (0, 5, "0.0%"),
            (7, 7, "100.0%"),
            (1, 16, "6.3%"),
            (5, 16, "31.3%"),
        ],
    )
    def test_one_decimal(self, passed, total, expected):
        """Test the rate is a percentage with one decimal, ties rounded up."""
        assert format_success_rate(passed, total) == expected


class TestFormatRunDuration:
    """Tests for format_run_duration()."""

    def test_two_decimals(self):
        """Test elapsed time is seconds with two decimals."""
        assert format_run_duration(RUN_START, RUN_START + timedelta(milliseconds=12346)) == "12.35s"

    def test_ties_round_up(self):
        """Test an exact half hundredth rounds up."""
        assert format_run_duration(RUN_START, RUN_START + timedelta(milliseconds=1125)) == "1.13s"

    def test_naive_and_aware_times(self):
        """Test a naive start is treated as UTC against an aware end."""
        naive_start = RUN_START.replace(tzinfo=None)

        assert format_run_duration(naive_start, RUN_START + timedelta(seconds=2)) == "2.00s"

    def test_missing_times(self):
        """Test missing start or end gives zero."""
        assert format_run_duration(None, RUN_START) == "0.00s"


class TestCalculateSummary:
    """Tests for calculate_summary()."""

    def test_counts(self):
        """Test each status lands in its bucket and totals add up."""
        groups = [
            SuiteGroup(
                name="A",
                tests=[
                    _record("p", "passed", assertions=2),
                    _record("f", "failed", assertions=1, retries="1/2"),
                ],
            ),
            SuiteGroup(
                name="B",
                tests=[_record("s", "skipped"), _record("t", "timedOut", retries="2/2")],
            ),
        ]

        summary = calculate_summary(groups, RUN_START, RUN_START + timedelta(seconds=2))

        assert summary.total_tests == 4
        assert (summary.passed, summary.failed, summary.skipped, summary.timed_out) == (1, 1, 1, 1)
        assert summary.total_assertions == 3
        assert summary.total_retries == 2
        assert summary.duration == "2.00s"
        assert summary.success_rate == "25.0%"

    def test_unrecognized_status_counts_in_total_only(self):
        """Test interrupted and unknown statuses are totals-only."""
        groups = [
            SuiteGroup(
                name="A",
                tests=[_record("i", "interrupted"), _record("x", "weird"), _record("p")],
            )
        ]

        summary = calculate_summary(groups, RUN_START, RUN_START)

        assert summary.total_tests == 3
        assert summary.passed + summary.failed + summary.skipped + summary.timed_out == 1

    def test_empty(self):
        """Test an empty run."""
        summary = calculate_summary([], RUN_START, RUN_START)

        assert summary.total_tests == 0
        assert summary.success_rate == "0%"
        assert summary.all_passed is True


# ==================== Model Tests ====================


class TestFinalReport:
    """Tests for FinalReport serialization."""

    def test_shape_and_order(self):
        """Test top-level keys and suite order follow insertion order."""
        report = _fixed_report(
            [SuiteGroup(name="Zeta", tests=[_record("z")]), SuiteGroup(name="Alpha", tests=[_record("a")])]
        )

        data = report.to_dict()

        assert list(data) == ["summary", "testSuites", "metadata"]
        assert list(data["testSuites"]) == ["Zeta", "Alpha"]
        assert list(data["summary"]) == [
            "totalTests",
            "passed",
            "failed",
            "skipped",
            "timedOut",
            "totalAssertions",
            "totalRetries",
            "duration",
            "timestamp",
            "successRate",
        ]
        assert data["metadata"]["reporterName"] == "Enhanced Playwright Reporter"

    def test_from_dict_restores_report(self):
        """Test a written report can be loaded back."""
        report = _fixed_report([SuiteGroup(name="A", tests=[_record("a", assertions=2)])])

        restored = FinalReport.from_dict(json.loads(ReportRenderer().to_json(report)))

        assert restored.summary == report.summary
        assert restored.test_suites[0].tests == report.test_suites[0].tests
        assert restored.metadata == report.metadata


# ==================== Renderer Tests ====================


class TestReportRenderer:
    """Tests for ReportRenderer."""

    def test_json_is_stable(self):
        """Test rendering the same report twice is byte-identical."""
        report = _fixed_report([SuiteGroup(name="A", tests=[_record("a", assertions=1)])])
        renderer = ReportRenderer()

        assert renderer.to_json(report) == renderer.to_json(report)

    def test_json_pretty_printed(self):
        """Test output is indented with two spaces and keeps icons."""
        report = _fixed_report([SuiteGroup(name="A", tests=[_record("a", assertions=1)])])

        output = ReportRenderer().to_json(report)

        assert output.startswith('{\n  "summary": {')
        assert '"emoji": "✅"' in output

    def test_write_overwrites_existing_file(self, tmp_path):
        """Test an existing report is replaced and no temp file is left."""
        path = tmp_path / "nested" / "out" / "report.json"
        path.parent.mkdir(parents=True)
        path.write_text("stale", encoding="utf-8")
        report = _fixed_report([SuiteGroup(name="A", tests=[_record("a")])])

        written = ReportRenderer().write(report, path)

        assert written == path
        assert json.loads(path.read_text(encoding="utf-8"))["summary"]["totalTests"] == 1
        assert [p.name for p in path.parent.iterdir()] == ["report.json"]

    def test_write_failure_raises(self, tmp_path):
        """Test file system errors surface as ReportWriteError."""
        report = _fixed_report([])
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")

        with pytest.raises(ReportWriteError) as exc_info:
            ReportRenderer().write(report, blocker / "report.json")

        assert exc_info.value.path == blocker / "report.json"

    def test_write_failure_cleans_temp_file(self, tmp_path):
        """Test a failed rename leaves no temporary file behind."""
        report = _fixed_report([])

        with patch("enhanced_reporter.report.renderer.os.replace", side_effect=OSError("denied")):
            with pytest.raises(ReportWriteError, match="denied"):
                ReportRenderer().write(report, tmp_path / "report.json")

        assert list(tmp_path.iterdir()) == []

    def test_format_overview(self):
        """Test the overview block lines."""
        summary = RunSummary(
            total_tests=4, passed=2, failed=1, skipped=1, total_assertions=9,
            total_retries=1, duration="3.26s", success_rate="50.0%",
        )

        text = ReportRenderer().format_overview(summary, "test-results/r.json")

        assert "Total: 4 | ✅ Passed: 2 | ❌ Failed: 1 | ⏭️ Skipped: 1\n" in text
        assert "Timed Out" not in text
        assert "📋 Assertions: 9 | 🔄 Retries: 1 | 📈 Success Rate: 50.0%" in text
        assert "⏱️ Duration: 3.26s | 📄 Report: test-results/r.json" in text

    def test_format_overview_timed_out(self):
        """Test timed-out tests are shown when there are any."""
        text = ReportRenderer().format_overview(RunSummary(total_tests=1, timed_out=1), "r.json")

        assert "| ⏰ Timed Out: 1" in text

    def test_format_suites(self):
        """Test suites, tests and assertions are listed in order."""
        failed = TestRecord(
            test_name="rejects bad password",
            result="failed",
            duration=210,
            assertions=(
                AssertionOutcome(description="toBeVisible", passed=True, duration=0),
                AssertionOutcome(description="toHaveText", passed=False, duration=15),
            ),
            retries="1/2",
        )
        report = _fixed_report(
            [SuiteGroup(name="Login Tests", tests=[_record("logs in"), failed])]
        )

        lines = ReportRenderer().format_suites(report).splitlines()

        assert lines[lines.index("📁 Login Tests") + 1 :] == [
            "  ✅ logs in (100ms)",
            "  ❌ rejects bad password (210ms) (retries: 1/2)",
            "    ✅ toBeVisible",
            "    ❌ toHaveText (15ms)",
        ]
