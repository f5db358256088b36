"""Daemon transport: external `curl` process.

Each request becomes one blocking `subprocess.run` call. The body is sent
with `--data-raw` so a leading `@` is never read as a file name.
"""

from __future__ import annotations

import subprocess

from core.domain.errors import SpawnError
from core.domain.models import HttpInvocation, RawOutput
from core.interfaces.transport import DaemonTransport


class CurlTransport(DaemonTransport):
    """Runs daemon requests through a command-line HTTP client."""

    name = "curl"

    def __init__(self, executable: str = "curl") -> None:
        self._executable = executable

    def build_command(self, invocation: HttpInvocation) -> list[str]:
        # -sS: no progress meter, but still print errors to stderr.
        cmd = [self._executable, "-sS", "-X", invocation.method, invocation.url]
        if invocation.body is not None:
            cmd += ["--data-raw", invocation.body]
        return cmd

    def execute(self, invocation: HttpInvocation) -> RawOutput:
        cmd = self.build_command(invocation)
        try:
            completed = subprocess.run(cmd, capture_output=True, check=False)
        except (OSError, ValueError) as exc:
            # ValueError: an argument holds a NUL byte and cannot reach exec.
            raise SpawnError(str(exc)) from exc
        return RawOutput(
            stdout=completed.stdout,
            stderr=completed.stderr,
            returncode=completed.returncode,
        )
