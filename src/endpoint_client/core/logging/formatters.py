"""
Log formatters: JSON, plain text and colored text.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

# Attributes every LogRecord carries; everything else came in through ``extra``
_RECORD_FIELDS = frozenset({
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'message', 'pathname', 'process', 'processName', 'relativeCreated',
    'thread', 'threadName', 'taskName', 'exc_info', 'exc_text', 'stack_info',
    'asctime',
})


def extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_FIELDS and not key.startswith('_')
    }


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Example output:
        {"timestamp": "2024-01-15T10:30:45.123000+00:00", "level": "DEBUG",
         "logger": "endpoint_client", "message": "Request dispatched",
         "method": "GET", "url": "objects/1"}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(extra_fields(record))

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """
    Plain text formatter.

    Format: [timestamp] [level] [logger] message key=value ...
    """

    def __init__(self):
        super().__init__(
            fmt='[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    def _append_extra(self, base_msg: str, record: logging.LogRecord) -> str:
        pairs: List[str] = [f"{key}={value}" for key, value in extra_fields(record).items()]
        if pairs:
            base_msg += " " + " ".join(pairs)
        return base_msg

    def format(self, record: logging.LogRecord) -> str:
        return self._append_extra(super().format(record), record)


class ColoredFormatter(TextFormatter):
    """Text formatter with ANSI-colored level names."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[1;31m', # Bold Red
        'RESET': '\033[0m'
    }

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        try:
            base_msg = logging.Formatter.format(self, record)
        finally:
            record.levelname = levelname
        return self._append_extra(base_msg, record)


def get_formatter(format_type: str) -> logging.Formatter:
    """
    Get formatter by type.

    Raises:
        ValueError: If format_type is unknown
    """
    formatters = {
        "json": JSONFormatter,
        "text": TextFormatter,
        "colored": ColoredFormatter,
    }

    formatter_class = formatters.get(format_type.lower())
    if not formatter_class:
        raise ValueError(
            f"Unknown format type: {format_type}. "
            f"Available: {', '.join(formatters.keys())}"
        )

    return formatter_class()
