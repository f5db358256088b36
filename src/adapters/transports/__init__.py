"""Concrete daemon transports.

Each module implements `core.interfaces.transport.DaemonTransport`.
"""

from __future__ import annotations

from adapters.transports.curl import CurlTransport
from adapters.transports.httpx_transport import HttpxTransport
from core.config import AppSettings
from core.domain.models import TransportKind
from core.interfaces.transport import DaemonTransport


def build_transport(settings: AppSettings) -> DaemonTransport:
    """Pick the transport named by `settings.daemon_transport`."""

    if settings.daemon_transport is TransportKind.HTTPX:
        return HttpxTransport(settings)
    return CurlTransport(settings.http_client_executable)


__all__ = [
    "CurlTransport",
    "HttpxTransport",
    "build_transport",
]
