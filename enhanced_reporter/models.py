"""Data models for a completed reporter run."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .notify.models import NotificationResult
from .report.models import FinalReport


@dataclass
class RunOutcome:
    """What a finished run produced.

    Attributes:
        report: The final report.
        output_path: Where the JSON report was written.
        notification: Notification outcome, or None when disabled.
    """

    report: FinalReport
    output_path: Path
    notification: Optional[NotificationResult] = None

    @property
    def notification_failed(self) -> bool:
        return self.notification is not None and not self.notification.sent

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "report": self.report.to_dict(),
            "output_path": str(self.output_path),
            "notification": self.notification.to_dict() if self.notification else None,
        }
