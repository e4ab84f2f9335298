"""Request/response models shared by the request builder and transports."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

import httpx

if TYPE_CHECKING:
    from .abort import AbortSignal

Headers = Dict[str, str]
QueryParams = Union[str, Mapping[str, Any]]


@dataclass(frozen=True)
class ProgressEvent:
    """
    Upload progress notification.

    Attributes:
        loaded: Bytes sent so far
        total: Total body size in bytes
    """
    loaded: int
    total: int

    @property
    def progress(self) -> float:
        if self.total <= 0:
            return 1.0
        return self.loaded / self.total


UploadProgressHandler = Callable[[ProgressEvent], None]


def _flatten(prefix: str, value: Any, pairs: List[Tuple[str, Any]]) -> None:
    if isinstance(value, Enum):
        value = value.value

    if isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]", item, pairs)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, pairs)
    else:
        pairs.append((prefix, value))


def encode_query(params: Optional[QueryParams]) -> str:
    """
    Serialize structured query params to a query string.

    Nested mappings and sequences use bracket notation, strings are
    returned unchanged.

    Example:
        >>> encode_query({"a": 0, "b": 1})
        'a=0&b=1'
        >>> encode_query({"filter": {"name": "x"}, "ids": [1, 2]})
        'filter%5Bname%5D=x&ids%5B0%5D=1&ids%5B1%5D=2'
    """
    if params is None:
        return ""
    if isinstance(params, str):
        return params.lstrip("?")

    pairs: List[Tuple[str, Any]] = []
    for key, value in params.items():
        _flatten(str(key), value, pairs)
    return str(httpx.QueryParams(pairs))


@dataclass
class NormalizedRequest:
    """
    Transport-agnostic description of one HTTP request.

    Instances are mutable: the configured auth handler receives the request
    before dispatch and may change headers or other fields in place.

    Attributes:
        method: HTTP method
        url: Resolved endpoint, relative to the API address
        headers: Request headers
        params: Structured query params or an already encoded query string
        data: Request body
        timeout: Timeout in milliseconds (None - transport default)
        on_upload_progress: Upload progress callback
        signal: Cancellation signal
        params_serializer: Query encoder applied to structured params
    """
    method: str
    url: str
    headers: Headers = field(default_factory=dict)
    params: Optional[QueryParams] = None
    data: Any = None
    timeout: Optional[float] = None
    on_upload_progress: Optional[UploadProgressHandler] = None
    signal: Optional["AbortSignal"] = None
    params_serializer: Callable[[Optional[QueryParams]], str] = encode_query

    @property
    def query_string(self) -> str:
        if self.params is None:
            return ""
        if isinstance(self.params, str):
            return self.params.lstrip("?")
        return self.params_serializer(self.params)

    @property
    def content_type(self) -> Optional[str]:
        for name, value in self.headers.items():
            if name.lower() == "content-type":
                return value
        return None


@dataclass
class Response:
    """
    Response returned by a transport.

    Attributes:
        status_code: HTTP status
        headers: Response headers
        data: Decoded JSON body, or text when the body is not JSON
        request: The request that produced this response
        raw: Underlying library response object
    """
    status_code: int
    headers: Headers = field(default_factory=dict)
    data: Any = None
    request: Optional[NormalizedRequest] = None
    raw: Any = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        return self.status_code < 400
