"""Enhanced test reporter.

Aggregates test results reported by a browser test runner into a
hierarchical JSON report with summary statistics, prints a console
summary, and optionally posts the summary to a Slack webhook.

Public API:
    EnhancedReporter: Lifecycle facade driven by the host runner.
    ReporterOptions: Reporter configuration.
    RunOutcome: Report, output path and notification result of a run.
"""

__version__ = "1.0.0"

from .config import ReporterOptions
from .models import RunOutcome
from .reporter import EnhancedReporter

__all__ = [
    "EnhancedReporter",
    "ReporterOptions",
    "RunOutcome",
    "__version__",
]
