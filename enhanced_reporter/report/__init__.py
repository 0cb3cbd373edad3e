"""Report assembly for a finished test run.

Computes summary statistics from the accumulated suite groups and renders
them as a JSON report file and console text.

Public API:
    ReportRenderer: Writes JSON and formats console output.
    calculate_summary: Build a RunSummary from suite groups.
    format_success_rate: Passed share as a percentage string.
    format_run_duration: Run wall time as a seconds string.
    FinalReport: Summary, suites and metadata.
    RunSummary: Aggregate counts.
    ReportMetadata: Reporter and environment details.
    ReportError: Base exception for module errors.
    ReportWriteError: Raised when the report file cannot be written.
"""

from .exceptions import ReportError, ReportWriteError
from .models import FinalReport, ReportMetadata, RunSummary
from .renderer import ReportRenderer
from .summary import calculate_summary, format_run_duration, format_success_rate

__all__ = [
    "ReportRenderer",
    "calculate_summary",
    "format_success_rate",
    "format_run_duration",
    "FinalReport",
    "RunSummary",
    "ReportMetadata",
    "ReportError",
    "ReportWriteError",
]
