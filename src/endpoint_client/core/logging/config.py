"""
Logging options accepted by ``ClientOptions.logging``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

DEFAULT_MAX_BYTES = 10 * 1024 * 1024


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    JSON = "json"
    TEXT = "text"
    COLORED = "colored"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Где и в каком виде ClientLogger пишет записи.

    ``level`` и ``format`` принимают как enum, так и строки в любом
    регистре. Консоль (stderr) включена по умолчанию, файл с ротацией
    включается через ``enable_file`` + ``file_path``.

    Example:
        >>> LoggingConfig(level="debug", format="json")
        >>> LoggingConfig.create(enable_file=True, file_path="/var/log/api.log")
    """

    level: Union[LogLevel, str] = LogLevel.INFO
    format: Union[LogFormat, str] = LogFormat.TEXT
    enable_console: bool = True
    enable_file: bool = False
    file_path: Optional[str] = None
    max_bytes: int = DEFAULT_MAX_BYTES
    backup_count: int = 5
    # Static fields attached to every record
    extra_fields: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'level', LogLevel(str(_value(self.level)).upper()))
        object.__setattr__(self, 'format', LogFormat(str(_value(self.format)).lower()))

        if self.enable_file and not self.file_path:
            raise ValueError("file_path is required when enable_file=True")
        if self.max_bytes <= 0:
            raise ValueError("max_bytes must be positive")
        if self.backup_count < 0:
            raise ValueError("backup_count must be non-negative")

    @classmethod
    def create(cls, **kwargs: Any) -> "LoggingConfig":
        """Keyword-only constructor; ``extra_fields=None`` means no extra fields."""
        if kwargs.get('extra_fields') is None:
            kwargs.pop('extra_fields', None)
        return cls(**kwargs)


def _value(member: Any) -> Any:
    return member.value if isinstance(member, Enum) else member
