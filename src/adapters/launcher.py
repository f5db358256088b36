"""Launch a named executable, fire-and-forget.

The name is trusted as given: no allow-list, no argument parsing. The
child runs detached in its own session and is never waited on.
"""

from __future__ import annotations

import subprocess
import sys

from core.domain.errors import LaunchError
from core.logging import get_logger

log = get_logger(__name__)


def open_app(name: str) -> int:
    """Spawn `name` as a detached process and return its PID."""

    kwargs: dict[str, object] = {
        "stdin": subprocess.DEVNULL,
        "stdout": subprocess.DEVNULL,
        "stderr": subprocess.DEVNULL,
    }
    if sys.platform.startswith("win"):
        kwargs["creationflags"] = subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
    else:
        kwargs["start_new_session"] = True

    try:
        process = subprocess.Popen([name], **kwargs)  # noqa: S603
    except OSError as exc:
        log.warning("app.launch.failed", app=name, error=str(exc))
        raise LaunchError(str(exc)) from exc

    log.info("app.launch.done", app=name, pid=process.pid)
    return process.pid
