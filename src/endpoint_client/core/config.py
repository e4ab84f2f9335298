"""
Конфигурация транспорта для HTTPClient.

HTTPClientConfig - процессный singleton: настраивается ровно один раз,
после этого только читается. ClientOptions - immutable (frozen dataclass)
описание настроек, из которого singleton создается.
"""

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, ClassVar, Optional, Union

from .exceptions import AlreadyConfiguredError, NotConfiguredError
from .logging import ClientLogger, LoggingConfig
from .models import NormalizedRequest, Response

if TYPE_CHECKING:
    from ..transports.base import Transport

AuthHandler = Callable[[NormalizedRequest, "Transport"], None]
AuthHandlerInternal = Callable[[NormalizedRequest], None]
ErrorHandler = Callable[[Exception], Union[Response, Any, Awaitable[Any]]]


async def default_error_handler(error: Exception) -> Any:
    """Пробросить ошибку транспорта без изменений."""
    raise error

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CLIENT OPTIONS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class ClientOptions:
    """
    Настройки для HTTPClientConfig.configure().

    Args:
        api_address: Базовый адрес API
        auth_handler: Функция (request, transport) -> None, дополняет запрос
            данными авторизации перед отправкой
        transport: Готовый транспорт (по умолчанию HttpxTransport)
        default_timeout: Таймаут по умолчанию (мс)
        error_handler: Обработчик ошибок транспорта (по умолчанию пробрасывает ошибку)
        logging: Конфигурация логирования (None - логирование выключено)

    Examples:
        >>> ClientOptions(api_address="https://api.example.com", auth_handler=add_token)
        >>> ClientOptions(
        ...     api_address="https://api.example.com",
        ...     auth_handler=add_token,
        ...     default_timeout=5000,
        ... )
    """
    api_address: str
    auth_handler: AuthHandler
    transport: Optional["Transport"] = None
    default_timeout: Optional[int] = None
    error_handler: Optional[ErrorHandler] = None
    logging: Optional[LoggingConfig] = None

    def __post_init__(self):
        """Валидация."""
        if not self.api_address:
            raise ValueError("api_address is required")
        if not callable(self.auth_handler):
            raise ValueError("auth_handler must be callable")
        if self.error_handler is not None and not callable(self.error_handler):
            raise ValueError("error_handler must be callable")
        if self.default_timeout is not None and self.default_timeout <= 0:
            raise ValueError("default_timeout must be positive")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# SINGLETON
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HTTPClientConfig:
    """
    Процессный singleton с транспортом, auth handler и error handler.

    Example:
        >>> def add_token(request, transport):
        ...     request.headers["Authorization"] = f"Bearer {TOKEN}"
        >>>
        >>> HTTPClientConfig.configure(
        ...     api_address="https://api.example.com/v1",
        ...     auth_handler=add_token,
        ...     default_timeout=10_000,
        ... )
        >>> config = HTTPClientConfig.get_config()
    """

    _instance: ClassVar[Optional["HTTPClientConfig"]] = None
    _lock = threading.Lock()

    def __init__(self, options: ClientOptions):
        # Отложенный импорт: transports зависят от core
        from ..transports.httpx_transport import HttpxTransport

        transport = options.transport
        if transport is None:
            transport = HttpxTransport(options.api_address, options.default_timeout)

        auth_handler = options.auth_handler

        def bound_auth_handler(request: NormalizedRequest) -> None:
            auth_handler(request, transport)

        logger: Optional[ClientLogger] = None
        if options.logging:
            logger = ClientLogger(options.logging)

        object.__setattr__(self, '_options', options)
        object.__setattr__(self, '_transport', transport)
        object.__setattr__(self, '_auth_handler', bound_auth_handler)
        object.__setattr__(self, '_error_handler', options.error_handler or default_error_handler)
        object.__setattr__(self, '_logger', logger)
        object.__setattr__(self, '_initialized', True)

    def __setattr__(self, name, value):
        """Запретить изменение после init (immutability)."""
        if hasattr(self, '_initialized'):
            raise RuntimeError(
                f"Cannot modify '{name}' - HTTPClientConfig is immutable."
            )
        object.__setattr__(self, name, value)

    @classmethod
    def configure(cls, options: Optional[ClientOptions] = None, **kwargs: Any) -> "HTTPClientConfig":
        """
        Настроить клиент. Допустим только один успешный вызов за процесс.

        Args:
            options: Готовый ClientOptions
            **kwargs: Поля ClientOptions, если options не передан

        Raises:
            AlreadyConfiguredError: Клиент уже настроен
            ValueError: Невалидные настройки
            TypeError: Переданы и options, и kwargs
        """
        with cls._lock:
            if cls._instance is not None:
                raise AlreadyConfiguredError()

            if options is None:
                options = ClientOptions(**kwargs)
            elif kwargs:
                raise TypeError("Pass either options or keyword arguments, not both")

            instance = cls(options)
            cls._instance = instance

        if instance._logger:
            instance._logger.info(
                "Client configured",
                api_address=options.api_address,
                transport=type(instance._transport).__name__,
                default_timeout=options.default_timeout,
            )
        return instance

    @classmethod
    def configure_from_env(
        cls,
        auth_handler: AuthHandler,
        env_file: Optional[str] = None,
        **overrides: Any,
    ) -> "HTTPClientConfig":
        """
        Настроить клиент из переменных окружения (ENDPOINT_CLIENT_*).

        Example:
            >>> HTTPClientConfig.configure_from_env(add_token, env_file=".env")
        """
        from .env_config import load_options_from_env
        return cls.configure(load_options_from_env(auth_handler, env_file=env_file, **overrides))

    @classmethod
    def get_config(cls) -> "HTTPClientConfig":
        """
        Получить настроенный singleton.

        Raises:
            NotConfiguredError: configure() еще не вызывался
        """
        instance = cls._instance
        if instance is None:
            raise NotConfiguredError()
        return instance

    @classmethod
    def is_configured(cls) -> bool:
        return cls._instance is not None

    @classmethod
    def _reset(cls) -> None:
        """Сбросить singleton. Только для тестов."""
        with cls._lock:
            instance = cls._instance
            cls._instance = None
        if instance is not None and instance._logger:
            instance._logger.close()

    @property
    def options(self) -> ClientOptions:
        return self._options

    @property
    def transport(self) -> "Transport":
        return self._transport

    @property
    def auth_handler(self) -> AuthHandlerInternal:
        return self._auth_handler

    @property
    def error_handler(self) -> ErrorHandler:
        return self._error_handler

    @property
    def logger(self) -> Optional[ClientLogger]:
        return self._logger

    async def aclose(self) -> None:
        """Закрыть транспорт (если он поддерживает aclose) и логгер."""
        close = getattr(self._transport, "aclose", None)
        if close is not None:
            await close()
        if self._logger:
            self._logger.close()
