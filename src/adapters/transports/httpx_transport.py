"""Daemon transport: in-process httpx client.

Produces the same `RawOutput` contract as the curl transport:
- the response body is "stdout" and the call succeeds for any HTTP status
  (curl without `-f` behaves the same way);
- a transport-level failure (connection refused, DNS, protocol error)
  becomes returncode 1 with the error text as "stderr".
"""

from __future__ import annotations

import httpx

from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.models import HttpInvocation, RawOutput
from core.interfaces.transport import DaemonTransport


class HttpxTransport(DaemonTransport):
    name = "httpx"

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    def execute(self, invocation: HttpInvocation) -> RawOutput:
        headers: dict[str, str] = {"Accept": "application/json"}
        content: bytes | None = None
        if invocation.body is not None:
            content = invocation.body.encode("utf-8")
            headers["Content-Type"] = "application/json"

        try:
            with build_client(
                self._settings,
                extra_headers=headers,
                no_timeout=True,
                transport=self._transport,
            ) as client:
                response = client.request(invocation.method, invocation.url, content=content)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            detail = str(exc) or exc.__class__.__name__
            return RawOutput(stdout=b"", stderr=detail.encode("utf-8"), returncode=1)

        return RawOutput(stdout=response.content, stderr=b"", returncode=0)
