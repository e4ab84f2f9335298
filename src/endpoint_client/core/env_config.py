"""
Configuration loader from environment variables and .env files.

Example .env file:
    ENDPOINT_CLIENT_API_ADDRESS=https://api.example.com/v1
    ENDPOINT_CLIENT_DEFAULT_TIMEOUT=10000
    ENDPOINT_CLIENT_LOG_ENABLED=true
    ENDPOINT_CLIENT_LOG_LEVEL=DEBUG
    ENDPOINT_CLIENT_LOG_FORMAT=json
"""

from typing import TYPE_CHECKING, Any, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .config import AuthHandler, ClientOptions, ErrorHandler
from .logging import LoggingConfig

if TYPE_CHECKING:
    from ..transports.base import Transport


_OVERRIDABLE = frozenset({'api_address', 'default_timeout', 'logging'})


class ClientSettings(BaseSettings):
    """
    Settings read from ENDPOINT_CLIENT_* variables.

    Priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Defaults
    """

    model_config = SettingsConfigDict(
        env_prefix='ENDPOINT_CLIENT_',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    api_address: str = Field(default="", description="Base API address")
    default_timeout: Optional[int] = Field(default=None, gt=0, description="Default timeout in milliseconds")

    log_enabled: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text", "colored"] = Field(default="text")

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator('log_format', mode='before')
    @classmethod
    def normalize_format(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v


def load_options_from_env(
    auth_handler: AuthHandler,
    error_handler: Optional[ErrorHandler] = None,
    transport: Optional["Transport"] = None,
    env_file: Optional[str] = None,
    **overrides: Any,
) -> ClientOptions:
    """
    Build ClientOptions from the environment.

    Explicit ``overrides`` (``api_address``, ``default_timeout``,
    ``logging``) win over environment values.

    Raises:
        pydantic.ValidationError: Invalid environment values
        ValueError: No API address configured
        TypeError: Unknown key in ``overrides``

    Example:
        >>> options = load_options_from_env(add_token, env_file=".env")
        >>> HTTPClientConfig.configure(options)
    """
    unknown = set(overrides) - _OVERRIDABLE
    if unknown:
        raise TypeError(f"Unexpected overrides: {', '.join(sorted(unknown))}")

    settings = ClientSettings(_env_file=env_file)

    logging_config = overrides.get('logging')
    if logging_config is None and settings.log_enabled:
        logging_config = LoggingConfig.create(level=settings.log_level, format=settings.log_format)

    return ClientOptions(
        api_address=overrides.get('api_address', settings.api_address),
        auth_handler=auth_handler,
        transport=transport,
        default_timeout=overrides.get('default_timeout', settings.default_timeout),
        error_handler=error_handler,
        logging=logging_config,
    )
