"""httpx client builders.

Centralizes headers and timeouts so the catalog fetcher, the in-process
daemon transport and the doctor checks all behave the same. Tests pass a
`httpx.MockTransport` through `transport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def _default_headers(settings: AppSettings, extra_headers: dict[str, str] | None) -> dict[str, str]:
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return headers


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    no_timeout: bool = False,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create a blocking `httpx.Client`.

    Requests time out after `settings.http_timeout_seconds` unless
    `no_timeout` is set (daemon calls may run for minutes).
    """

    settings = settings or AppSettings()
    timeout = None if no_timeout else settings.http_timeout_seconds
    return httpx.Client(
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
        headers=_default_headers(settings, extra_headers),
        transport=transport,
    )


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the same defaults (used by health checks)."""

    settings = settings or AppSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=_default_headers(settings, extra_headers),
        transport=transport,
    )
