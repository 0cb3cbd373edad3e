"""Reporter configuration with defaults resolved at construction."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

DEFAULT_OUTPUT_FILE = "enhanced-test-report.json"
DEFAULT_OUTPUT_DIR = "test-results"
DEFAULT_SLACK_CHANNEL = "#test-results"
DEFAULT_SLACK_USERNAME = "Playwright Reporter"

_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_flag(name: str) -> Optional[bool]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return value.strip().lower() not in _FALSE_VALUES


@dataclass
class ReporterOptions:
    """Options for EnhancedReporter.

    Attributes:
        output_file: Report file name.
        output_dir: Directory the report is written to.
        include_assertions: Reserved; assertions are always recorded.
        clean_output: Reserved.
        slack_webhook_url: Incoming webhook URL. None disables notification.
        slack_channel: Channel the message is addressed to.
        slack_username: Display name for the posting bot.
        slack_enabled: Pass False to keep a configured webhook silent.
            Resolved to True only when a webhook URL is present.
        slack_timeout: Optional webhook request timeout in seconds.
    """

    output_file: str = DEFAULT_OUTPUT_FILE
    output_dir: str = DEFAULT_OUTPUT_DIR
    include_assertions: bool = True
    clean_output: bool = True
    slack_webhook_url: Optional[str] = None
    slack_channel: str = DEFAULT_SLACK_CHANNEL
    slack_username: str = DEFAULT_SLACK_USERNAME
    slack_enabled: Optional[bool] = None
    slack_timeout: Optional[float] = None

    def __post_init__(self):
        if not self.slack_webhook_url:
            self.slack_webhook_url = None
        self.slack_enabled = self.slack_enabled is not False and self.slack_webhook_url is not None

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir) / self.output_file

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReporterOptions":
        """Create from the camelCase option names used in reporter configs."""
        return cls(
            output_file=data.get("outputFile") or DEFAULT_OUTPUT_FILE,
            output_dir=data.get("outputDir") or DEFAULT_OUTPUT_DIR,
            include_assertions=data.get("includeAssertions") is not False,
            clean_output=data.get("cleanOutput") is not False,
            slack_webhook_url=data.get("slackWebhookUrl"),
            slack_channel=data.get("slackChannel") or DEFAULT_SLACK_CHANNEL,
            slack_username=data.get("slackUsername") or DEFAULT_SLACK_USERNAME,
            slack_enabled=data.get("slackEnabled"),
            slack_timeout=data.get("slackTimeout"),
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> "ReporterOptions":
        """Create from environment variables, with keyword overrides.

        Environment variables:
            REPORT_OUTPUT_FILE, REPORT_OUTPUT_DIR: Report location.
            SLACK_WEBHOOK_URL: Enables notification when set.
            SLACK_CHANNEL, SLACK_USERNAME: Message addressing.
            SLACK_ENABLED: "0", "false", "no" or "off" disables notification.
            SLACK_TIMEOUT: Webhook request timeout in seconds.

        Overrides whose value is None are ignored.
        """
        timeout = os.getenv("SLACK_TIMEOUT")
        values: dict[str, Any] = {
            "output_file": os.getenv("REPORT_OUTPUT_FILE") or DEFAULT_OUTPUT_FILE,
            "output_dir": os.getenv("REPORT_OUTPUT_DIR") or DEFAULT_OUTPUT_DIR,
            "slack_webhook_url": os.getenv("SLACK_WEBHOOK_URL"),
            "slack_channel": os.getenv("SLACK_CHANNEL") or DEFAULT_SLACK_CHANNEL,
            "slack_username": os.getenv("SLACK_USERNAME") or DEFAULT_SLACK_USERNAME,
            "slack_enabled": _env_flag("SLACK_ENABLED"),
            "slack_timeout": float(timeout) if timeout else None,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
