"""endpoint-client - fluent request builder over a configurable HTTP transport."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.constants import HttpMethod, HttpContentType, HttpResponseCode
from .core.endpoint import Endpoint, resolve_url
from .core.models import NormalizedRequest, Response, ProgressEvent, encode_query
from .core.abort import AbortController, AbortSignal, create_abort_controller
from .core.config import ClientOptions, HTTPClientConfig
from .core.env_config import load_options_from_env
from .core.http_client import HTTPClient
from .core.logging import LoggingConfig
from .core.exceptions import (
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
)
from .transports import Transport, HttpxTransport, RequestsTransport

# Users can configure logging themselves using logging.getLogger('endpoint_client')
logging.getLogger('endpoint_client').addHandler(logging.NullHandler())

try:
    __version__ = version("endpoint-client")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Builder
    "HTTPClient",

    # Config
    "HTTPClientConfig",
    "ClientOptions",
    "LoggingConfig",
    "load_options_from_env",

    # Endpoints & constants
    "Endpoint",
    "resolve_url",
    "HttpMethod",
    "HttpContentType",
    "HttpResponseCode",

    # Models
    "NormalizedRequest",
    "Response",
    "ProgressEvent",
    "encode_query",

    # Cancellation
    "AbortController",
    "AbortSignal",
    "create_abort_controller",

    # Transports
    "Transport",
    "HttpxTransport",
    "RequestsTransport",

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

    # Version
    "__version__",
]
