"""Daemon transport contract.

Why a Protocol:
- The curl subprocess transport and the in-process httpx transport are
  interchangeable behind one structural contract.
- Tests can hand the bridge any object with an `execute` method.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import HttpInvocation, RawOutput


@runtime_checkable
class DaemonTransport(Protocol):
    """Minimal contract for executing one daemon request.

    Design rules:
    - `execute` is synchronous and may block for arbitrary wall-clock time;
      callers run it on a worker thread.
    - A request that ran but failed is reported through `RawOutput`
      (non-zero `returncode`, stderr text), not by raising.
    - Failure to start the request at all raises `SpawnError`.
    """

    name: str

    def execute(self, invocation: HttpInvocation) -> RawOutput:
        """Run `invocation` to completion and return its captured output."""

        ...
