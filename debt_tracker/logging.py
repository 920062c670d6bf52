"""Logging setup for debt-tracker.

Log records go to stderr so that the tables and reports printed on stdout
can be piped without noise. Records about a single debtor carry its id in
``record.debtor_id``; the JSON formatter lifts it into its own field.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

# Record attributes copied into JSON output when present
CONTEXT_FIELDS = ("debtor_id", "command")


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    stream: TextIO | None = None,
) -> None:
    """Configure the root logger for debt-tracker.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unknown names
        fall back to INFO.
    format_type : str
        "standard" for human-readable lines or "json" for one JSON
        document per record.
    stream : TextIO | None
        Destination for the handler. Defaults to ``sys.stderr``.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("debt_tracker").setLevel(log_level)
    # Faker logs every provider lookup at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with debtor context when available."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for name in CONTEXT_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def debtor_logger(logger: logging.Logger, debtor_id: str) -> logging.LoggerAdapter:
    """Wrap ``logger`` so every record carries ``debtor_id``."""
    return logging.LoggerAdapter(logger, {"debtor_id": debtor_id})
