"""Exceptions for the notify module."""


class NotificationError(Exception):
    """Raised when a webhook notification cannot be delivered."""

    def __init__(self, reason: str, status_code: int | None = None):
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Failed to send notification: {reason}")
