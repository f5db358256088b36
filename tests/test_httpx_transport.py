"""Tests for the in-process httpx transport."""
import json

import httpx
import pytest

from adapters.http_client import build_client
from adapters.transports.httpx_transport import HttpxTransport
from core.config import AppSettings
from core.domain.models import HttpInvocation
from core.services.daemon_bridge import DaemonBridge


def test_body_is_sent_verbatim(settings: AppSettings) -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = request.content.decode("utf-8")
        return httpx.Response(200, text='{"status":"success"}')

    transport = HttpxTransport(settings, transport=httpx.MockTransport(handler))
    raw = transport.execute(HttpInvocation("DELETE", "http://stub-daemon:11434/api/delete", '{ "name": "a"b" }'))

    assert seen == {
        "method": "DELETE",
        "url": "http://stub-daemon:11434/api/delete",
        "body": '{ "name": "a"b" }',
    }
    assert raw.succeeded
    assert raw.stdout == b'{"status":"success"}'


def test_http_error_status_is_not_a_transport_failure(settings: AppSettings) -> None:
    transport = HttpxTransport(
        settings,
        transport=httpx.MockTransport(lambda request: httpx.Response(404, text='{"error":"model not found"}')),
    )
    raw = transport.execute(HttpInvocation("POST", "http://stub-daemon:11434/api/generate", "{}"))

    assert raw.succeeded
    assert raw.stdout == b'{"error":"model not found"}'


def test_connection_error_becomes_failed_output(settings: AppSettings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = HttpxTransport(settings, transport=httpx.MockTransport(handler))
    raw = transport.execute(HttpInvocation("GET", "http://stub-daemon:11434/api/tags"))

    assert raw.returncode == 1
    assert raw.stdout == b""
    assert raw.stderr == b"connection refused"


@pytest.mark.asyncio
async def test_bridge_over_httpx_transport(settings: AppSettings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/generate":
            payload = json.loads(request.content)
            lines = [{"response": word + " "} for word in payload["prompt"].split()]
            lines.append({"response": "", "done": True})
            return httpx.Response(200, text="\n".join(json.dumps(line) for line in lines))
        return httpx.Response(200, text='{"models":[]}')

    bridge = DaemonBridge(settings, transport=HttpxTransport(settings, transport=httpx.MockTransport(handler)))

    assert await bridge.generate("llama3", "echo me back") == "echo me back "
    assert (await bridge.pull("llama3")).data == '{"models":[]}'


def test_malformed_url_becomes_failed_output(settings: AppSettings) -> None:
    transport = HttpxTransport(settings, transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    raw = transport.execute(HttpInvocation("GET", "http://[not-an-ipv6]:11434/api/tags"))

    assert raw.returncode == 1
    assert raw.stdout == b""
    assert raw.stderr


def test_daemon_requests_carry_no_timeout(settings: AppSettings) -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.extensions["timeout"])
        return httpx.Response(200, text="{}")

    HttpxTransport(settings, transport=httpx.MockTransport(handler)).execute(
        HttpInvocation("GET", "http://stub-daemon:11434/api/tags")
    )

    assert seen == {"connect": None, "read": None, "write": None, "pool": None}


def test_catalog_client_keeps_configured_timeout(settings: AppSettings) -> None:
    with build_client(settings) as client:
        assert client.timeout.read == settings.http_timeout_seconds
    with build_client(settings, no_timeout=True) as client:
        assert client.timeout.read is None
