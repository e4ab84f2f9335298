"""Core модули: конфигурация, построение и выполнение запросов."""

from .constants import HttpMethod, HttpContentType, HttpResponseCode
from .endpoint import Endpoint, resolve_url, encode_path_param
from .models import NormalizedRequest, Response, ProgressEvent, encode_query
from .abort import AbortController, AbortSignal, create_abort_controller, race_with_signal
from .exceptions import (
    EndpointClientError,
    ConfigurationError,
    NotConfiguredError,
    AlreadyConfiguredError,
    UnresolvedPathParameterError,
    RequestAlreadyInvokedError,
    TransportError,
    CanceledError,
    TimeoutError,
    ConnectionError,
    HTTPError,
    classify_httpx_exception,
    classify_requests_exception,
)
from .config import ClientOptions, HTTPClientConfig, default_error_handler
from .env_config import ClientSettings, load_options_from_env
from .http_client import HTTPClient

__all__ = [
    # Constants
    "HttpMethod",
    "HttpContentType",
    "HttpResponseCode",
    # Endpoints
    "Endpoint",
    "resolve_url",
    "encode_path_param",
    # Models
    "NormalizedRequest",
    "Response",
    "ProgressEvent",
    "encode_query",
    # Cancellation
    "AbortController",
    "AbortSignal",
    "create_abort_controller",
    "race_with_signal",
    # Config
    "ClientOptions",
    "HTTPClientConfig",
    "default_error_handler",
    "ClientSettings",
    "load_options_from_env",
    # Builder
    "HTTPClient",
    # Exceptions
    "EndpointClientError",
    "ConfigurationError",
    "NotConfiguredError",
    "AlreadyConfiguredError",
    "UnresolvedPathParameterError",
    "RequestAlreadyInvokedError",
    "TransportError",
    "CanceledError",
    "TimeoutError",
    "ConnectionError",
    "HTTPError",
    "classify_httpx_exception",
    "classify_requests_exception",
]
