"""Chat notifications for finished test runs.

Public API:
    SlackNotifier: Builds and posts Slack webhook messages.
    NotificationResult: Outcome of a delivery attempt.
    NotificationError: Raised by the transport on delivery failure.
"""

from .exceptions import NotificationError
from .models import NotificationResult
from .slack import SlackNotifier

__all__ = [
    "SlackNotifier",
    "NotificationResult",
    "NotificationError",
]
