# src/endpoint_client/core/http_client.py
import inspect
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .abort import AbortSignal
from .config import HTTPClientConfig
from .constants import DEFAULT_CONTENT_TYPE, HttpContentType, HttpMethod
from .endpoint import encode_path_param, resolve_url
from .exceptions import RequestAlreadyInvokedError
from .models import NormalizedRequest, QueryParams, Response, UploadProgressHandler

PathParam = Union[str, int, float]


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class HTTPClient:
    """
    Построитель одного запроса к API.

    Настройки накапливаются цепочкой вызовов, запрос выполняется
    ``await invoke()``. Экземпляр одноразовый.

    Example:
        >>> response = await (
        ...     HTTPClient(Api.OBJECT)
        ...     .method(HttpMethod.PUT)
        ...     .parameters(42)
        ...     .data({"text": "updated"})
        ...     .invoke()
        ... )
        >>> response.status_code
        200
    """

    def __init__(self, endpoint: Union[str, Enum]):
        """
        Args:
            endpoint: Шаблон endpoint, например ``"objects/{0}"``
        """
        self._endpoint: str = _enum_value(endpoint)
        self._method: str = HttpMethod.GET.value
        self._headers: Dict[str, str] = {}
        self._data: Any = None
        self._path_params: List[str] = []
        self._query_params: Optional[QueryParams] = None
        self._timeout: Optional[float] = None
        self._upload_progress: Optional[UploadProgressHandler] = None
        self._signal: Optional[AbortSignal] = None
        self._invoked = False

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def method(self, method: Union[HttpMethod, str]) -> "HTTPClient":
        """Sets request method."""
        self._method = str(_enum_value(method)).upper()
        return self

    def content_type(self, content_type: Union[HttpContentType, str]) -> "HTTPClient":
        """Sets Content-Type header value. Default: application/json."""
        return self.header("Content-Type", _enum_value(content_type))

    def header(self, name: str, value: str) -> "HTTPClient":
        """
        Sets a request header.

        Names are matched case-insensitively, the last value wins.
        """
        for existing in list(self._headers):
            if existing.lower() == name.lower():
                del self._headers[existing]
        self._headers[name] = value
        return self

    def data(self, data: Any) -> "HTTPClient":
        """
        Sets data to be sent in request body.

        Only sent for POST, PUT, PATCH and DELETE.
        """
        self._data = data
        return self

    def parameters(self, *params: PathParam) -> "HTTPClient":
        """
        Appends endpoint path parameters.

        Each value is percent-encoded; repeated calls accumulate in order.
        """
        self._path_params.extend(encode_path_param(param) for param in params)
        return self

    def query_params(self, params: QueryParams) -> "HTTPClient":
        """Sets the query params (mapping or pre-encoded string)."""
        self._query_params = params
        return self

    def timeout(self, timeout: float) -> "HTTPClient":
        """Overrides the default timeout (milliseconds) for this request."""
        self._timeout = timeout
        return self

    def upload_progress(self, handler: UploadProgressHandler) -> "HTTPClient":
        """Sets callback on upload progress."""
        self._upload_progress = handler
        return self

    def abort_signal(self, signal: AbortSignal) -> "HTTPClient":
        """Binds an AbortSignal that cancels the request."""
        self._signal = signal
        return self

    def build_request(self) -> NormalizedRequest:
        """
        Собрать нормализованный запрос без отправки.

        Raises:
            UnresolvedPathParameterError: Не заданы параметры пути
        """
        headers: Dict[str, str] = {"Content-Type": DEFAULT_CONTENT_TYPE.value}
        for name, value in self._headers.items():
            if name.lower() == "content-type":
                headers.pop("Content-Type", None)
            headers[name] = value

        url = resolve_url(self._endpoint, *self._path_params)

        return NormalizedRequest(
            method=self._method,
            url=url,
            headers=headers,
            params=self._query_params,
            data=self._data,
            timeout=self._timeout,
            on_upload_progress=self._upload_progress,
            signal=self._signal,
        )

    async def invoke(self) -> Response:
        """
        Executes the request.

        Returns:
            Response транспорта, либо значение, которым error handler
            заменил ошибку

        Raises:
            RequestAlreadyInvokedError: invoke() уже вызывался
            UnresolvedPathParameterError: Не заданы параметры пути
            NotConfiguredError: HTTPClientConfig не настроен
            Exception: Ошибка транспорта, проброшенная error handler
        """
        if self._invoked:
            raise RequestAlreadyInvokedError(self._endpoint)
        self._invoked = True

        request = self.build_request()
        config = HTTPClientConfig.get_config()

        # Auth handler меняет запрос на месте
        config.auth_handler(request)

        if config.logger:
            config.logger.debug(
                "Request dispatched",
                method=request.method,
                url=request.url,
                endpoint=self._endpoint,
                headers=request.headers,
                timeout=request.timeout,
            )

        try:
            return await config.transport.request(request)
        except Exception as e:
            # Ошибка передается в error handler как есть
            result = config.error_handler(e)

        if inspect.isawaitable(result):
            result = await result
        return result
