"""Status values reported by the host and their display icons."""

PASSED = "passed"
FAILED = "failed"
SKIPPED = "skipped"
TIMED_OUT = "timedOut"
INTERRUPTED = "interrupted"
UNKNOWN = "unknown"

STATUS_ICONS = {
    PASSED: "✅",
    FAILED: "❌",
    SKIPPED: "⏭️",
    TIMED_OUT: "⏰",
    INTERRUPTED: "🛑",
}

UNKNOWN_ICON = "❓"


def get_status_icon(status: str) -> str:
    """Return the display icon for a test status.

    Args:
        status: Raw status string from the host.

    Returns:
        The matching icon, or the unknown icon for unrecognized values.
    """
    return STATUS_ICONS.get(status, UNKNOWN_ICON)
