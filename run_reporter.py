"""CLI entry point: build an enhanced report from a Playwright JSON report."""

import argparse
import sys

from dotenv import load_dotenv

from enhanced_reporter import EnhancedReporter, ReporterOptions
from enhanced_reporter.host import ReportLoadError, load_playwright_report, replay_playwright_report
from enhanced_reporter.logging_config import configure_logging
from enhanced_reporter.report import ReportWriteError


def main(argv: list[str] | None = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Build an enhanced test report from a Playwright JSON report"
    )
    parser.add_argument("report", help="Path to the Playwright JSON report")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (overrides LOG_LEVEL env var)",
    )
    parser.add_argument("--output-dir", help="Report directory (default: test-results)")
    parser.add_argument(
        "--output-file", help="Report file name (default: enhanced-test-report.json)"
    )
    parser.add_argument(
        "--slack-webhook-url", help="Slack incoming webhook (overrides SLACK_WEBHOOK_URL)"
    )
    parser.add_argument("--slack-channel", help="Slack channel (default: #test-results)")
    parser.add_argument(
        "--no-slack",
        action="store_true",
        help="Do not send a Slack notification even if a webhook is configured",
    )
    args = parser.parse_args(argv)
    configure_logging(level_override=args.log_level)

    options = ReporterOptions.from_env(
        output_dir=args.output_dir,
        output_file=args.output_file,
        slack_webhook_url=args.slack_webhook_url,
        slack_channel=args.slack_channel,
        slack_enabled=False if args.no_slack else None,
    )

    try:
        data = load_playwright_report(args.report)
        outcome = replay_playwright_report(data, EnhancedReporter(options))
    except (ReportLoadError, ReportWriteError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if outcome.notification_failed:
        print(f"WARNING: {outcome.notification.error}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
