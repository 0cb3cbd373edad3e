"""ReportRenderer for writing the JSON report and console summaries."""

import json
import logging
import os
import tempfile
from pathlib import Path

from enhanced_reporter.results.status import get_status_icon

from .exceptions import ReportWriteError
from .models import FinalReport, RunSummary

logger = logging.getLogger(__name__)

SEPARATOR = "━" * 60


class ReportRenderer:
    """Renders a FinalReport as a JSON file and as console text.

    Rendering never reorders suites or tests. Serializing the same report
    twice gives identical output.
    """

    def __init__(self, indent: int = 2):
        self._indent = indent

    def to_json(self, report: FinalReport) -> str:
        """Serialize a report as pretty-printed JSON."""
        return json.dumps(report.to_dict(), indent=self._indent, ensure_ascii=False)

    def write(self, report: FinalReport, path: Path) -> Path:
        """Write the report JSON, replacing any existing file.

        The parent directory is created if needed. The file is written to a
        temporary sibling first and renamed into place.

        Args:
            report: Report to write.
            path: Destination file.

        Returns:
            The path written.

        Raises:
            ReportWriteError: If the directory or file cannot be written.
        """
        path = Path(path)
        content = self.to_json(report)
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(content)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise ReportWriteError(path, str(e)) from e

        logger.info("Wrote report to %s", path, extra={"report_path": str(path)})
        return path

    def format_overview(self, summary: RunSummary, output_path: Path) -> str:
        """Format the totals block shown after a run.

        Args:
            summary: Run summary.
            output_path: Where the JSON report was written.

        Returns:
            Multi-line overview text.
        """
        totals = (
            f"Total: {summary.total_tests} | ✅ Passed: {summary.passed} | "
            f"❌ Failed: {summary.failed} | ⏭️ Skipped: {summary.skipped}"
        )
        if summary.timed_out > 0:
            totals += f" | ⏰ Timed Out: {summary.timed_out}"

        lines = [
            "",
            "📊 Enhanced Test Report Summary:",
            SEPARATOR,
            totals,
            f"📋 Assertions: {summary.total_assertions} | 🔄 Retries: {summary.total_retries}"
            f" | 📈 Success Rate: {summary.success_rate}",
            f"⏱️ Duration: {summary.duration} | 📄 Report: {output_path}",
            SEPARATOR,
        ]
        return "\n".join(lines)

    def format_suites(self, report: FinalReport) -> str:
        """Format every suite with its tests and their assertions."""
        lines = ["", "📋 Test Results by Suite:", SEPARATOR]

        for group in report.test_suites:
            lines.append("")
            lines.append(f"📁 {group.name}")
            for test in group.tests:
                retry_info = f" (retries: {test.retries})" if test.retries else ""
                lines.append(
                    f"  {get_status_icon(test.result)} {test.test_name} "
                    f"({test.duration}ms){retry_info}"
                )
                for assertion in test.assertions:
                    duration_info = (
                        f" ({assertion.duration}ms)" if assertion.duration > 0 else ""
                    )
                    lines.append(
                        f"    {assertion.emoji} {assertion.description}{duration_info}"
                    )

        return "\n".join(lines)
