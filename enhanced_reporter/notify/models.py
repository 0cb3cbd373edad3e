"""Data models for the notify module."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass
class NotificationResult:
    """Result of sending a run notification.

    Attributes:
        attempted_at: When delivery was attempted.
        sent: Whether the webhook accepted the message.
        status_code: HTTP status returned, if a response arrived.
        error: Failure description, if delivery failed.
    """

    attempted_at: datetime = field(default_factory=datetime.now)
    sent: bool = False
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "attempted_at": self.attempted_at.isoformat(),
            "sent": self.sent,
            "status_code": self.status_code,
            "error": self.error,
        }
