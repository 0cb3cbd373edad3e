"""SlackNotifier for posting run summaries to an incoming webhook."""

import json
import logging
import time
from typing import Any, Optional
from urllib.parse import urlparse

import requests

from enhanced_reporter.report.models import REPORTER_NAME, FinalReport
from enhanced_reporter.results.status import FAILED, PASSED, SKIPPED

from .exceptions import NotificationError
from .models import NotificationResult

logger = logging.getLogger(__name__)

COLOR_DANGER = "danger"
COLOR_GOOD = "good"
COLOR_WARNING = "warning"
COLOR_SUITES_WITH_FAILURES = "#ff9500"


def _overall_tone(report: FinalReport) -> tuple[str, str]:
    """Return ``(color, emoji)`` for the header attachment."""
    summary = report.summary
    if summary.failed > 0:
        return COLOR_DANGER, "❌"
    if summary.all_passed:
        return COLOR_GOOD, "✅"
    return COLOR_WARNING, "⚠️"


def _suite_icon(failed: int, skipped: int) -> str:
    if failed > 0:
        return "❌"
    if skipped > 0:
        return "⚠️"
    return "✅"


class SlackNotifier:
    """Builds Slack messages from a FinalReport and posts them to a webhook.

    Delivery failures are logged and returned as a NotificationResult; they
    never raise out of ``notify``.

    Example usage:
        notifier = SlackNotifier("https://hooks.slack.com/services/...")
        result = notifier.notify(report)
        if not result.sent:
            print(result.error)
    """

    def __init__(
        self,
        webhook_url: str,
        channel: str = "#test-results",
        username: str = "Playwright Reporter",
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the notifier.

        Args:
            webhook_url: Incoming webhook URL; must use https.
            channel: Channel the message is addressed to.
            username: Display name for the posting bot.
            timeout: Request timeout in seconds. None waits indefinitely.
            session: Pre-built requests session (for testing).
        """
        self._webhook_url = webhook_url
        self._channel = channel
        self._username = username
        self._timeout = timeout
        self._session = session

    def _get_session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def _failed_tests_block(self, report: FinalReport) -> dict[str, Any]:
        entries = []
        for suite_name, test in report.tests_with_status(FAILED):
            names = ", ".join(a.description for a in test.failed_assertions)
            entries.append(
                f":x: ({suite_name})\n *{test.test_name}* ({test.duration}ms)\n"
                f"   └ Failed assertions: {names}"
            )
        return {
            "color": COLOR_DANGER,
            "title": f":boom: Failure Tests ({report.summary.failed})",
            "text": "\n\n".join(entries),
            "mrkdwn_in": ["text"],
        }

    def _passed_tests_block(self, report: FinalReport) -> dict[str, Any]:
        entries = []
        for suite_name, test in report.tests_with_status(PASSED):
            names = ", ".join(a.description for a in test.passed_assertions)
            entries.append(
                f":white_check_mark: ({suite_name})\n *{test.test_name}* ({test.duration}ms)\n"
                f"   └ Passed assertions: {names}"
            )
        return {
            "color": COLOR_DANGER,
            "title": f" :white_check_mark: Passed Tests ({report.summary.passed})",
            "text": "\n\n".join(entries),
            "mrkdwn_in": ["text"],
        }

    def _suites_block(self, report: FinalReport) -> dict[str, Any]:
        lines = []
        for group in report.test_suites:
            passed = group.count(PASSED)
            failed = group.count(FAILED)
            skipped = group.count(SKIPPED)
            lines.append(
                f"{_suite_icon(failed, skipped)} *{group.name}*: "
                f"{passed} passed, {failed} failed, {skipped} skipped"
            )
        return {
            "color": COLOR_SUITES_WITH_FAILURES if report.summary.failed > 0 else COLOR_GOOD,
            "title": "📋 Test Suites Summary",
            "text": "\n".join(lines),
            "mrkdwn_in": ["text"],
        }

    def build_payload(self, report: FinalReport, now: Optional[float] = None) -> dict[str, Any]:
        """Build the webhook message for a finished run.

        The passed-tests block is added under the same condition as the
        failed-tests block (at least one failure), so a fully green run
        shows only the header and suite breakdown.

        Args:
            report: The finalized report.
            now: Epoch seconds for the header timestamp; defaults to now.

        Returns:
            JSON-serializable message payload.
        """
        summary = report.summary
        color, emoji = _overall_tone(report)

        header = {
            "color": color,
            "title": f"{emoji} Test Run Complete",
            "fields": [
                {
                    "title": "Summary",
                    "value": (
                        f"Total: {summary.total_tests} | ✅ Passed: {summary.passed} | "
                        f"❌ Failed: {summary.failed} | ⏭️ Skipped: {summary.skipped}"
                    ),
                    "short": False,
                },
                {"title": "Success Rate", "value": summary.success_rate, "short": True},
                {"title": "Duration", "value": summary.duration, "short": True},
                {
                    "title": "Assertions",
                    "value": f"{summary.total_assertions} total",
                    "short": True,
                },
                {
                    "title": "Retries",
                    "value": f"{summary.total_retries} tests retried",
                    "short": True,
                },
            ],
            "footer": REPORTER_NAME,
            "ts": int(now if now is not None else time.time()),
        }

        attachments = [header]
        if summary.failed > 0:
            attachments.append(self._failed_tests_block(report))
        if summary.failed > 0:
            attachments.append(self._passed_tests_block(report))
        attachments.append(self._suites_block(report))

        return {
            "channel": self._channel,
            "username": self._username,
            "icon_emoji": ":test_tube:",
            "attachments": attachments,
        }

    def post(self, payload: dict[str, Any]) -> int:
        """POST a payload to the webhook.

        Args:
            payload: Message to send.

        Returns:
            The HTTP status code (always 200).

        Raises:
            NotificationError: If the URL is not https, the request fails,
                or the webhook answers with anything but 200.
        """
        if urlparse(self._webhook_url).scheme != "https":
            raise NotificationError("webhook URL must use https")

        try:
            response = self._get_session().post(
                self._webhook_url,
                data=json.dumps(payload),
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise NotificationError(str(e)) from e

        if response.status_code != 200:
            raise NotificationError(
                f"HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        return response.status_code

    def notify(self, report: FinalReport) -> NotificationResult:
        """Build and send the notification for a report.

        Returns:
            NotificationResult describing the outcome; failures are
            recorded there instead of raised.
        """
        result = NotificationResult()
        logger.info("Sending Slack notification to %s", self._channel)

        try:
            result.status_code = self.post(self.build_payload(report))
            result.sent = True
            logger.info("Slack notification sent")
        except NotificationError as e:
            result.status_code = e.status_code
            result.error = e.reason
            logger.error(
                "Failed to send Slack notification: %s",
                e.reason,
                extra={"status_code": e.status_code},
            )

        return result
