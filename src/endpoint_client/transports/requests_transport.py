# src/endpoint_client/transports/requests_transport.py
"""
Transport backed by a requests.Session.

Each request runs in a worker thread so ``invoke()`` stays awaitable.
A canceled request returns control immediately; the worker thread is left
to finish in the background since requests cannot interrupt a socket read.
"""

import asyncio
import threading
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

import requests
from requests.adapters import HTTPAdapter

from ..core.abort import race_with_signal
from ..core.exceptions import HTTPError, classify_requests_exception
from ..core.models import NormalizedRequest, Response
from .base import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_TIMEOUT_MS,
    body_kind,
    decode_payload,
    has_body,
    iter_with_progress,
    split_multipart,
    timeout_seconds,
    without_content_type,
)


class RequestsTransport:
    """
    Synchronous requests session exposed through the async Transport contract.

    Args:
        base_url: API address prepended to relative endpoints
        timeout: Default timeout (ms)
        session: Pre-built session (owned by the caller)
        chunk_size: Chunk size used when reporting upload progress
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: Optional[float] = None,
        *,
        session: Optional[requests.Session] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self._base_url = base_url
        self._timeout = timeout if timeout is not None else DEFAULT_TIMEOUT_MS
        self._chunk_size = chunk_size
        self._session = session
        self._owns_session = session is None
        self._lock = threading.Lock()

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    def _get_session(self) -> requests.Session:
        with self._lock:
            if self._session is None:
                session = requests.Session()
                # No retries at this layer
                adapter = HTTPAdapter(max_retries=0)
                session.mount("http://", adapter)
                session.mount("https://", adapter)
                self._session = session
            return self._session

    async def aclose(self) -> None:
        with self._lock:
            if self._session is not None and self._owns_session:
                self._session.close()
                self._session = None

    def full_url(self, url: str) -> str:
        if urlsplit(url).scheme or not self._base_url:
            return url
        return f"{self._base_url.rstrip('/')}/{url.lstrip('/')}"

    def prepare(self, request: NormalizedRequest) -> requests.PreparedRequest:
        headers = dict(request.headers)
        kwargs: Dict[str, Any] = {}

        if has_body(request):
            kind = body_kind(request)
            if kind == "raw":
                kwargs["data"] = request.data
            elif kind == "multipart":
                # requests generates the boundary itself
                headers = without_content_type(headers)
                kwargs["files"] = split_multipart(request.data)
            elif kind == "form":
                kwargs["data"] = dict(request.data)
            else:
                kwargs["json"] = request.data

        query = request.query_string
        if query:
            kwargs["params"] = query

        prepared = self._get_session().prepare_request(
            requests.Request(
                method=request.method.upper(),
                url=self.full_url(request.url),
                headers=headers,
                **kwargs,
            )
        )

        if request.on_upload_progress is not None and prepared.body is not None:
            body = prepared.body
            if isinstance(body, str):
                body = body.encode("utf-8")
            prepared.headers["Content-Length"] = str(len(body))
            prepared.body = iter_with_progress(body, request.on_upload_progress, self._chunk_size)

        return prepared

    def _send(self, request: NormalizedRequest) -> requests.Response:
        timeout = request.timeout if request.timeout is not None else self._timeout
        return self._get_session().send(
            self.prepare(request),
            timeout=timeout_seconds(timeout),
        )

    async def request(self, request: NormalizedRequest) -> Response:
        try:
            raw = await race_with_signal(
                asyncio.to_thread(self._send, request),
                request.signal,
                url=request.url,
                request=request,
            )
        except requests.exceptions.RequestException as e:
            raise classify_requests_exception(e, request) from e

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
