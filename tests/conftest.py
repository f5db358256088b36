"""Shared fixtures: isolated settings and a scripted daemon transport."""
from __future__ import annotations

from typing import Callable

import pytest

from core.config import AppSettings
from core.domain.models import BodyEncoding, HttpInvocation, RawOutput


class ScriptedTransport:
    """In-memory transport: records invocations, replies from a route table."""

    name = "scripted"

    def __init__(self, routes: dict[tuple[str, str], RawOutput | Callable[[HttpInvocation], RawOutput]]) -> None:
        self.routes = routes
        self.calls: list[HttpInvocation] = []

    def execute(self, invocation: HttpInvocation) -> RawOutput:
        self.calls.append(invocation)
        path = invocation.url.split("11434", 1)[-1]
        reply = self.routes[(invocation.method, path)]
        if callable(reply):
            return reply(invocation)
        return reply


def ok(stdout: bytes | str) -> RawOutput:
    if isinstance(stdout, str):
        stdout = stdout.encode("utf-8")
    return RawOutput(stdout=stdout, stderr=b"", returncode=0)


def failed(stderr: bytes | str, stdout: bytes = b"", returncode: int = 7) -> RawOutput:
    if isinstance(stderr, str):
        stderr = stderr.encode("utf-8")
    return RawOutput(stdout=stdout, stderr=stderr, returncode=returncode)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        daemon_base_url="http://stub-daemon:11434",
        catalog_url="https://catalog.test/library",
        body_encoding=BodyEncoding.JSON,
    )


@pytest.fixture
def template_settings(settings: AppSettings) -> AppSettings:
    return settings.model_copy(update={"body_encoding": BodyEncoding.TEMPLATE})
