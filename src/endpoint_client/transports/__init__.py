"""Transports executing normalized requests."""

from .base import DEFAULT_TIMEOUT_MS, Transport
from .httpx_transport import HttpxTransport
from .requests_transport import RequestsTransport

__all__ = [
    "Transport",
    "HttpxTransport",
    "RequestsTransport",
    "DEFAULT_TIMEOUT_MS",
]
