"""
Logging system for endpoint-client.

Example:
    >>> from endpoint_client.core.logging import LoggingConfig
    >>> HTTPClientConfig.configure(
    ...     api_address="https://api.example.com",
    ...     auth_handler=add_token,
    ...     logging=LoggingConfig.create(level="DEBUG", format="json"),
    ... )
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import ClientLogger, LOGGER_NAME
from .formatters import JSONFormatter, TextFormatter, ColoredFormatter, get_formatter

__all__ = [
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    "ClientLogger",
    "LOGGER_NAME",
    "JSONFormatter",
    "TextFormatter",
    "ColoredFormatter",
    "get_formatter",
]
