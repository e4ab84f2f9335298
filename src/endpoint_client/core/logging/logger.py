"""
Logger used by HTTPClientConfig and the request builder.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from .config import LoggingConfig, LogLevel
from .formatters import get_formatter
from ...utils.sanitizer import mask_sensitive_data

LOGGER_NAME = "endpoint_client"


class _ExtraFieldsFilter(logging.Filter):
    """Adds static fields from LoggingConfig.extra_fields to every record."""

    def __init__(self, fields: Dict[str, Any]):
        super().__init__()
        self.fields = fields

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class ClientLogger:
    """
    Thin wrapper over a stdlib logger.

    Keyword arguments passed to the log methods become ``extra`` fields and
    are masked with ``mask_sensitive_data`` first.

    Example:
        >>> logger = ClientLogger(LoggingConfig.create(level="DEBUG"))
        >>> logger.debug("Request dispatched", method="GET", url="objects")
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = LOGGER_NAME):
        self.config = config or LoggingConfig()
        self.name = name
        self._closed = False

        self._logger = logging.getLogger(name)
        self._previous_level = self._logger.level
        self._logger.setLevel(self._get_level(self.config.level))
        self._logger.propagate = False

        # Remove handlers left from a previous instance with the same name
        for handler in self._logger.handlers[:]:
            if not isinstance(handler, logging.NullHandler):
                self._logger.removeHandler(handler)
                handler.close()

        formatter = get_formatter(self.config.format.value)
        level = self._get_level(self.config.level)

        handlers = []
        if self.config.enable_console:
            handlers.append(logging.StreamHandler(sys.stderr))

        if self.config.enable_file and self.config.file_path:
            path = Path(self.config.file_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(RotatingFileHandler(
                filename=str(path),
                maxBytes=self.config.max_bytes,
                backupCount=self.config.backup_count,
                encoding='utf-8'
            ))

        for handler in handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)
            if self.config.extra_fields:
                handler.addFilter(_ExtraFieldsFilter(self.config.extra_fields))
            self._logger.addHandler(handler)
        self._handlers = handlers

    @staticmethod
    def _get_level(level: LogLevel) -> int:
        return getattr(logging, level.value)

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        if self._closed:
            return
        self._logger.log(level, message, extra=mask_sensitive_data(kwargs))

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def close(self) -> None:
        """
        Flush and close the handlers added by this logger.

        The shared logger gets its level and propagation back, other
        handlers (the package NullHandler) stay attached.

        Idempotent, safe to call multiple times.
        """
        if self._closed:
            return

        for handler in self._handlers:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)
        self._handlers = []

        self._logger.setLevel(self._previous_level)
        self._logger.propagate = True

        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
