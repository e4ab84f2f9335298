# src/endpoint_client/transports/httpx_transport.py
"""
Асинхронный транспорт на базе httpx.

Транспорт по умолчанию: создается HTTPClientConfig.configure(), если
транспорт не передан явно.
"""

from typing import Any, Dict, Optional

import httpx

from ..core.abort import race_with_signal
from ..core.exceptions import HTTPError, classify_httpx_exception
from ..core.models import NormalizedRequest, Response
from .base import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_TIMEOUT_MS,
    aiter_with_progress,
    body_kind,
    decode_payload,
    has_body,
    split_multipart,
    timeout_seconds,
    without_content_type,
)

# httpx требует абсолютный URL при сборке тела запроса
_ENCODING_URL = "http://localhost/"


class HttpxTransport:
    """
    Транспорт поверх httpx.AsyncClient.

    Example:
        >>> transport = HttpxTransport("https://api.example.com/v1", timeout=5000)
        >>> response = await transport.request(NormalizedRequest("GET", "objects"))
        >>> await transport.aclose()

    Args:
        base_url: Базовый адрес API
        timeout: Таймаут по умолчанию (мс)
        client: Готовый httpx.AsyncClient (например, с httpx.MockTransport)
        chunk_size: Размер чанка при отслеживании upload progress
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: Optional[float] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self._base_url = base_url
        self._timeout = timeout if timeout is not None else DEFAULT_TIMEOUT_MS
        self._chunk_size = chunk_size

        # Клиент создается лениво, если не передан
        self._client: Optional[httpx.AsyncClient] = client
        self._owns_client = client is None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    def _get_client(self) -> httpx.AsyncClient:
        """Получить или создать httpx клиент."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=httpx.Timeout(timeout_seconds(self._timeout)),
            )
        return self._client

    async def aclose(self) -> None:
        """Закрыть клиент и освободить ресурсы."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxTransport":
        self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def _encode_body(self, request: NormalizedRequest) -> Dict[str, Any]:
        """Собрать тело запроса, вернуть kwargs для build_request."""
        headers = dict(request.headers)
        kind = body_kind(request)

        if kind == "raw":
            data = request.data
            content = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        else:
            if kind == "multipart":
                encoded = httpx.Request("POST", _ENCODING_URL, files=split_multipart(request.data))
                # Boundary берется из заголовка, сгенерированного httpx
                headers = without_content_type(headers)
                headers["Content-Type"] = encoded.headers["Content-Type"]
            elif kind == "form":
                encoded = httpx.Request("POST", _ENCODING_URL, data=request.data)
            else:
                encoded = httpx.Request("POST", _ENCODING_URL, json=request.data)
            content = encoded.read()

        if request.on_upload_progress is not None:
            headers["Content-Length"] = str(len(content))
            return {
                "headers": headers,
                "content": aiter_with_progress(content, request.on_upload_progress, self._chunk_size),
            }

        return {"headers": headers, "content": content}

    def build_request(self, request: NormalizedRequest) -> httpx.Request:
        kwargs: Dict[str, Any] = {"headers": request.headers}
        if has_body(request):
            kwargs = self._encode_body(request)

        query = request.query_string
        if query:
            kwargs["params"] = httpx.QueryParams(query)

        if request.timeout is not None:
            kwargs["timeout"] = httpx.Timeout(timeout_seconds(request.timeout))

        return self._get_client().build_request(request.method.upper(), request.url, **kwargs)

    async def request(self, request: NormalizedRequest) -> Response:
        """
        Выполнить запрос.

        Raises:
            CanceledError: Сработал AbortSignal
            TimeoutError: Таймаут запроса
            ConnectionError: Ошибка соединения
            HTTPError: Статус ответа >= 400
        """
        client = self._get_client()

        try:
            http_request = self.build_request(request)
            raw = await race_with_signal(
                client.send(http_request),
                request.signal,
                url=request.url,
                request=request,
            )
        except httpx.HTTPError as e:
            raise classify_httpx_exception(e, request) from e

        response = Response(
            status_code=raw.status_code,
            headers=dict(raw.headers),
            data=decode_payload(raw),
            request=request,
            raw=raw,
        )

        if raw.status_code >= 400:
            raise HTTPError(response)

        return response
