"""
Иерархия исключений endpoint-client.

Классификация:
- ConfigurationError (fatal=True) - ошибки жизненного цикла конфигурации
- UnresolvedPathParameterError (fatal=True) - не заполнены параметры пути
- TransportError - любые ошибки транспорта, проходят через error handler
"""

from typing import TYPE_CHECKING, Any, Optional

import httpx
import requests

if TYPE_CHECKING:
    from .models import NormalizedRequest, Response

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class EndpointClientError(Exception):
    """Базовое исключение endpoint-client."""

    retryable: bool = False
    fatal: bool = False

    def __init__(self, message: str, **kwargs):
        self.message = message
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# КОНФИГУРАЦИЯ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ConfigurationError(EndpointClientError):
    """Ошибка конфигурации."""
    fatal = True

class NotConfiguredError(ConfigurationError):
    """Конфигурация прочитана до вызова HTTPClientConfig.configure()."""

    def __init__(self, message: str = "HTTPClient was not configured. Use HTTPClientConfig.configure()."):
        super().__init__(message)

class AlreadyConfiguredError(ConfigurationError):
    """Повторный вызов HTTPClientConfig.configure()."""

    def __init__(self, message: str = "HTTPClient has been already configured."):
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ПОСТРОЕНИЕ ЗАПРОСА
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class UnresolvedPathParameterError(EndpointClientError):
    """
    В шаблоне endpoint остался незаполненный плейсхолдер.

    Args:
        endpoint: Исходный шаблон
        index: Номер плейсхолдера без значения
    """
    fatal = True

    def __init__(self, endpoint: str, index: int):
        self.endpoint = endpoint
        self.index = index

        msg = (
            f"Endpoint {endpoint} path parameters not resolved. "
            f"Set value for {{{index}}} with HTTPClient.parameters() method."
        )
        super().__init__(msg)

class RequestAlreadyInvokedError(EndpointClientError):
    """invoke() вызван повторно на том же builder."""
    fatal = True

    def __init__(self, endpoint: str):
        self.endpoint = endpoint
        super().__init__(
            f"Request to {endpoint} has already been invoked. "
            f"Create a new HTTPClient for every request."
        )

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ТРАНСПОРТ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TransportError(EndpointClientError):
    """
    Ошибка транспорта.

    Всегда проходит через настроенный error handler.

    Args:
        message: Сообщение об ошибке
        url: URL запроса
        request: Нормализованный запрос
        response: Ответ сервера (если он был получен)
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        request: Optional["NormalizedRequest"] = None,
        response: Optional["Response"] = None,
    ):
        self.url = url
        self.request = request
        self.response = response
        super().__init__(message)

class CanceledError(TransportError):
    """Запрос отменен через AbortSignal."""

    def __init__(
        self,
        url: Optional[str] = None,
        request: Optional["NormalizedRequest"] = None,
        reason: Any = None,
    ):
        self.reason = reason
        super().__init__("canceled", url=url, request=request)

class TimeoutError(TransportError):
    """
    Таймаут запроса.

    Args:
        message: Сообщение об ошибке
        url: URL запроса
        timeout: Значение таймаута (мс)
    """
    retryable = True

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        request: Optional["NormalizedRequest"] = None,
    ):
        self.timeout = timeout

        msg = message
        if timeout:
            msg += f" (timeout: {timeout}ms)"

        super().__init__(msg, url=url, request=request)

class ConnectionError(TransportError):
    """
    Ошибка подключения.

    Примеры:
    - Connection refused
    - Connection reset
    - DNS resolution failed
    """
    retryable = True

class HTTPError(TransportError):
    """
    Сервер ответил статусом >= 400.

    Args:
        response: Ответ сервера
        message: Дополнительное сообщение
    """

    def __init__(self, response: "Response", message: str = ""):
        self.status_code = response.status_code
        url = response.request.url if response.request is not None else None

        msg = f"HTTP {self.status_code} error for {url}"
        if message:
            msg += f": {message}"

        super().__init__(msg, url=url, request=response.request, response=response)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def classify_httpx_exception(
    exc: Exception,
    request: "NormalizedRequest",
) -> TransportError:
    """
    Конвертировать httpx исключения в наши.

    Args:
        exc: Исключение из httpx
        request: Нормализованный запрос

    Returns:
        TransportError с правильной классификацией

    Examples:
        >>> exc = httpx.ReadTimeout("timed out")
        >>> our_exc = classify_httpx_exception(exc, request)
        >>> assert isinstance(our_exc, TimeoutError)
    """
    if isinstance(exc, httpx.TimeoutException):
        return TimeoutError(str(exc) or "Request timeout", request.url, request.timeout, request=request)

    elif isinstance(exc, (httpx.ConnectError, httpx.NetworkError, httpx.ProxyError)):
        return ConnectionError(str(exc) or "Connection error", url=request.url, request=request)

    else:
        return TransportError(str(exc) or exc.__class__.__name__, url=request.url, request=request)


def classify_requests_exception(
    exc: Exception,
    request: "NormalizedRequest",
) -> TransportError:
    """Конвертировать requests.exceptions в наши исключения."""

    if isinstance(exc, requests.exceptions.Timeout):
        return TimeoutError(str(exc) or "Request timeout", request.url, request.timeout, request=request)

    elif isinstance(exc, requests.exceptions.ConnectionError):
        return ConnectionError(str(exc) or "Connection error", url=request.url, request=request)

    else:
        return TransportError(str(exc) or exc.__class__.__name__, url=request.url, request=request)
