"""EnhancedReporter - receives host lifecycle events and produces the report."""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, TextIO

from .config import ReporterOptions
from .host.models import TestCase, TestResult, as_utc
from .models import RunOutcome
from .notify import SlackNotifier
from .report import FinalReport, ReportRenderer, ReportWriteError, calculate_summary
from .results import ResultAccumulator, RunStateError, TestRecord, format_completion_line

logger = logging.getLogger(__name__)


class EnhancedReporter:
    """Aggregates test results into a structured report.

    The host calls ``on_begin`` once, ``on_test_begin``/``on_test_end`` for
    every test attempt, then ``on_end`` once. ``on_end`` writes the JSON
    report, prints the console summary and, if a webhook is configured,
    posts a Slack notification. A notification failure is logged and
    recorded on the returned RunOutcome; it never affects the report.

    Example:
        reporter = EnhancedReporter(ReporterOptions(output_dir="out"))
        reporter.on_begin(total_tests=2)
        reporter.on_test_begin(test)
        reporter.on_test_end(test, result)
        outcome = reporter.on_end()
        print(outcome.report.summary.success_rate)
    """

    def __init__(
        self,
        options: Optional[ReporterOptions] = None,
        renderer: Optional[ReportRenderer] = None,
        notifier: Optional[SlackNotifier] = None,
        stream: Optional[TextIO] = None,
        root_dir: Optional[Path] = None,
    ):
        """Initialize the reporter.

        Args:
            options: Reporter options. Defaults to ReporterOptions().
            renderer: Renderer for JSON and console text.
            notifier: Pre-built notifier (for testing). Created from the
                options when needed if not provided.
            stream: Where console output goes. Defaults to stdout.
            root_dir: Directory test file paths are made relative to.
        """
        self._options = options or ReporterOptions()
        self._renderer = renderer or ReportRenderer()
        self._notifier = notifier
        self._stream = stream
        self._accumulator = ResultAccumulator(root_dir=root_dir)
        self._started_at: Optional[datetime] = None
        self._finished_at: Optional[datetime] = None

        if self._options.slack_enabled:
            logger.info("Slack integration enabled for %s", self._options.slack_channel)

    @property
    def options(self) -> ReporterOptions:
        return self._options

    @property
    def accumulator(self) -> ResultAccumulator:
        return self._accumulator

    def _get_notifier(self) -> SlackNotifier:
        if self._notifier is None:
            self._notifier = SlackNotifier(
                webhook_url=self._options.slack_webhook_url,
                channel=self._options.slack_channel,
                username=self._options.slack_username,
                timeout=self._options.slack_timeout,
            )
        return self._notifier

    def _print(self, text: str) -> None:
        print(text, file=self._stream or sys.stdout)

    def on_begin(self, total_tests: int = 0, started_at: Optional[datetime] = None) -> None:
        """Mark the start of the run.

        Args:
            total_tests: Number of tests the host plans to run.
            started_at: Run start time; defaults to now.

        Raises:
            ReportWriteError: If the output directory cannot be created.
        """
        self._started_at = as_utc(started_at) or datetime.now(timezone.utc)
        logger.info("Starting test run with %d tests", total_tests)
        self._print(f"🚀 Enhanced Reporter: Starting test run with {total_tests} tests")

        output_dir = Path(self._options.output_dir)
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ReportWriteError(output_dir, str(e)) from e

    def on_test_begin(self, test: TestCase, started_at: Optional[datetime] = None) -> None:
        """Record when a test started."""
        self._accumulator.record_test_start(test, started_at)

    def on_test_end(self, test: TestCase, result: TestResult) -> TestRecord:
        """Record a finished test attempt and print its console line.

        Returns:
            The TestRecord added to the report.

        Raises:
            RunStateError: If the run has already ended.
        """
        record = self._accumulator.record_test_end(test, result)
        self._print(format_completion_line(test, result, len(record.assertions)))
        return record

    def on_end(self, finished_at: Optional[datetime] = None) -> RunOutcome:
        """Finalize the run: summarize, write, print and notify.

        Args:
            finished_at: Run end time; defaults to now.

        Returns:
            RunOutcome with the report, its path and the notification result.

        Raises:
            RunStateError: If called more than once.
            ReportWriteError: If the report file cannot be written.
        """
        if self._accumulator.is_sealed:
            raise RunStateError("on_end called more than once")

        self._finished_at = as_utc(finished_at) or datetime.now(timezone.utc)
        groups = self._accumulator.seal()
        started_at = self._started_at or self._finished_at

        report = FinalReport(
            summary=calculate_summary(groups, started_at, self._finished_at),
            test_suites=groups,
        )

        output_path = self._renderer.write(report, self._options.output_path)

        self._print(self._renderer.format_overview(report.summary, output_path))
        self._print(self._renderer.format_suites(report))

        notification = None
        if self._options.slack_enabled:
            self._print("\n📤 Sending Slack notification...")
            notification = self._get_notifier().notify(report)
            if notification.sent:
                self._print("✅ Slack notification sent successfully!")
            else:
                self._print(f"❌ Failed to send Slack notification: {notification.error}")

        return RunOutcome(report=report, output_path=output_path, notification=notification)
