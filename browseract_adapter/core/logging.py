# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Logging for the BrowserAct adapter.

Task lifecycle events carry their fields (task_id, mode, status, attempts)
as logging extras. Both formatters render those fields, and both mask
anything that looks like a credential: workflow runs carry account
passwords and every request carries the API key.
"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict


# Attributes every LogRecord has; anything else came in through extra=
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

_SECRET_MARKERS = ("password", "api_key", "apikey", "authorization", "token")
MASK = "***"


def _is_secret(key: str) -> bool:
    key = key.lower()
    return any(marker in key for marker in _SECRET_MARKERS)


def event_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Extras attached to a record, with credential-like values masked."""
    return {
        key: MASK if _is_secret(key) else value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line for the host's log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        entry.update(event_fields(record))
        return json.dumps(entry, default=str)


class TaskTextFormatter(logging.Formatter):
    """
    Human-readable lines for local runs.

    Event fields are appended in the order they were logged:
        2025-01-01 12:00:00 INFO browseract.task_controller: task completed task_id=t1 status=finished
    """

    def __init__(self):
        super().__init__(fmt="%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = event_fields(record)
        if not fields:
            return line
        suffix = " ".join(f"{key}={value}" for key, value in fields.items())
        head, sep, trace = line.partition("\n")
        return f"{head} {suffix}{sep}{trace}"


FORMATTERS = {
    "json": JSONFormatter,
    "text": TaskTextFormatter,
}


def get_logger(name: str, log_level: str = "INFO", log_format: str = "json") -> logging.Logger:
    """
    Get a logger writing to stdout.

    Args:
        name: Logger name
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_format: "json" or "text"; anything else falls back to json

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Module-level loggers are built at import time; replace rather than stack handlers
    logger.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(FORMATTERS.get(log_format, JSONFormatter)())
    logger.addHandler(handler)

    return logger


def log_event(logger: logging.Logger, event: str, level: str = "INFO", **fields: Any) -> None:
    """
    Log a task lifecycle event.

    Args:
        logger: Logger instance
        event: Short event name ("task submitted", "task timed out", ...)
        level: Log level name
        **fields: Event fields, rendered by both formatters
    """
    getattr(logger, level.lower())(event, extra=fields)


def get_service_logger(service_name: str) -> logging.Logger:
    """Logger for an adapter component, configured from the adapter config."""
    from browseract_adapter.core.config import get_config
    config = get_config()
    return get_logger(f"browseract.{service_name}", log_level=config.log_level, log_format=config.log_format)
