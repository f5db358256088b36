"""Bridge error taxonomy.

Every failure a bridge operation can surface derives from `BridgeError`,
so callers (the CLI, a GUI front end) catch one type and display
`str(exc)`.
"""

from __future__ import annotations


class BridgeError(Exception):
    """Base bridge error.

    Attributes:
        code: machine readable error code (e.g. "SPAWN_FAILED").
        message: human readable message, also the `str()` of the exception.
    """

    code = "BRIDGE_ERROR"
    prefix = ""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        self.message = f"{self.prefix}{detail}"
        super().__init__(self.message)


class DispatchError(BridgeError):
    """Blocking work could not be scheduled on, or joined from, a worker thread."""

    code = "DISPATCH_FAILED"
    prefix = "Failed to join task: "


class SpawnError(BridgeError):
    """The external HTTP client executable could not be started."""

    code = "SPAWN_FAILED"
    prefix = "Failed to execute command: "


class CommandFailedError(BridgeError):
    """The external call ran but exited non-zero; carries its stderr."""

    code = "COMMAND_FAILED"
    prefix = "Command executed with failing error code: "


class OutputDecodeError(BridgeError):
    """Process output was not valid UTF-8."""

    code = "DECODE_FAILED"
    prefix = "Failed to parse output: "


class CatalogFetchError(BridgeError):
    """The catalog page could not be fetched or read."""

    code = "CATALOG_FETCH_FAILED"
    prefix = "Failed to fetch URL or read response text: "


class LaunchError(BridgeError):
    """A named executable could not be launched."""

    code = "LAUNCH_FAILED"
