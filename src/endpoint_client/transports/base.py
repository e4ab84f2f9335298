"""Transport contract and helpers shared by transport implementations."""

from typing import Any, AsyncIterator, Dict, Iterator, Mapping, Optional, Protocol, Tuple, runtime_checkable

from ..core.constants import BODY_METHODS, HttpContentType
from ..core.models import NormalizedRequest, ProgressEvent, Response, UploadProgressHandler

# Used when neither ClientOptions.default_timeout nor the request sets one
DEFAULT_TIMEOUT_MS = 30_000

DEFAULT_CHUNK_SIZE = 64 * 1024


@runtime_checkable
class Transport(Protocol):
    """
    Opaque HTTP execution capability.

    Implementations send one ``NormalizedRequest`` and return a ``Response``.
    Failures are raised as ``TransportError``; a status >= 400 is raised as
    ``HTTPError`` carrying the response.
    """

    async def request(self, request: NormalizedRequest) -> Response:
        ...


def has_body(request: NormalizedRequest) -> bool:
    return request.data is not None and request.method.upper() in BODY_METHODS


def body_kind(request: NormalizedRequest) -> str:
    """Classify the body as ``raw``, ``multipart``, ``form`` or ``json``."""
    data = request.data
    if isinstance(data, (bytes, bytearray, str)):
        return "raw"

    content_type = (request.content_type or "").lower()
    if isinstance(data, Mapping):
        if content_type.startswith(HttpContentType.MULTIPART.value):
            return "multipart"
        if content_type.startswith(HttpContentType.FORM.value):
            return "form"
    return "json"


def split_multipart(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Convert a mapping into ``files`` entries.

    File-like values and tuples are passed through, plain values become
    form fields without a filename.
    """
    files: Dict[str, Any] = {}
    for name, value in data.items():
        if isinstance(value, tuple) or hasattr(value, "read"):
            files[name] = value
        elif isinstance(value, (bytes, bytearray)):
            files[name] = (name, bytes(value))
        else:
            files[name] = (None, str(value).encode("utf-8"))
    return files


def without_content_type(headers: Mapping[str, str]) -> Dict[str, str]:
    return {k: v for k, v in headers.items() if k.lower() != "content-type"}


def _chunks(body: bytes, chunk_size: int) -> Iterator[Tuple[bytes, int]]:
    loaded = 0
    for start in range(0, len(body), chunk_size):
        chunk = body[start:start + chunk_size]
        loaded += len(chunk)
        yield chunk, loaded


def iter_with_progress(
    body: bytes,
    handler: UploadProgressHandler,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Iterator[bytes]:
    total = len(body)
    if total == 0:
        handler(ProgressEvent(loaded=0, total=0))
    for chunk, loaded in _chunks(body, chunk_size):
        yield chunk
        handler(ProgressEvent(loaded=loaded, total=total))


async def aiter_with_progress(
    body: bytes,
    handler: UploadProgressHandler,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> AsyncIterator[bytes]:
    total = len(body)
    if total == 0:
        handler(ProgressEvent(loaded=0, total=0))
    for chunk, loaded in _chunks(body, chunk_size):
        yield chunk
        handler(ProgressEvent(loaded=loaded, total=total))


def decode_payload(raw: Any) -> Any:
    """Decode a library response body: JSON when declared, text otherwise."""
    if not raw.content:
        return None

    content_type = raw.headers.get("content-type", "")
    if "json" in content_type.lower():
        try:
            return raw.json()
        except ValueError:
            return raw.text
    return raw.text


def timeout_seconds(timeout_ms: Optional[float]) -> Optional[float]:
    if timeout_ms is None:
        return None
    return timeout_ms / 1000
