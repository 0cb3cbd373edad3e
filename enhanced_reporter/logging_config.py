"""Centralized logging configuration for the reporter."""

import json
import logging
import os
from datetime import datetime, timezone

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

NOISY_LOGGERS = ("urllib3", "requests")


# Attributes passed via ``extra=`` that JSON output keeps as their own keys
CONTEXT_FIELDS = ("suite", "test", "status", "status_code", "report_path")


class JSONFormatter(logging.Formatter):
    """Emit each record as a single-line JSON document for CI log collectors.

    Context set through ``extra=`` (suite, test, status, status_code,
    report_path) is lifted to top-level keys so a collector can filter a
    run's events without parsing messages.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "severity": record.levelname,
            "source": record.name,
            "event": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value
        if record.exc_info:
            entry["traceback"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _build_handler(log_file: str | None) -> logging.Handler:
    if log_file:
        return logging.FileHandler(log_file, encoding="utf-8")
    return logging.StreamHandler()


def configure_logging(level_override: str | None = None) -> None:
    """Configure root logging from the environment.

    Args:
        level_override: Takes precedence over LOG_LEVEL when set.

    Environment variables:
        LOG_LEVEL: DEBUG, INFO, WARNING or ERROR. Defaults to INFO;
            unknown names fall back to INFO.
        LOG_FORMAT: "json" for JSON lines, otherwise plain text.
        LOG_FILE: Write logs to this file instead of stderr, keeping
            them apart from the console report.
    """
    level_name = (level_override or os.getenv("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = _build_handler(os.getenv("LOG_FILE"))
    handler.setLevel(level)
    if os.getenv("LOG_FORMAT", "text").lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
