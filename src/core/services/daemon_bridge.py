"""Inference-daemon bridge operations.

Each operation builds a request, executes it on a worker thread through
the configured transport, and normalizes the raw output:

- `list_models`, `pull`, `delete` return an `OperationResult` envelope.
- `generate` returns the aggregated text directly and raises a
  `BridgeError` on failure. The two shapes are deliberate: front ends
  consume them differently.

No operation retries, caches or shares state with another invocation, so
concurrent calls are independent. Only the daemon itself serializes work.
"""

from __future__ import annotations

from adapters.transports import build_transport
from core.config import AppSettings
from core.domain.errors import BridgeError
from core.domain.models import (
    DaemonRequest,
    DeleteRequest,
    GenerateRequest,
    ListModelsRequest,
    OperationResult,
    PullRequest,
    RawOutput,
)
from core.interfaces.transport import DaemonTransport
from core.logging import get_logger
from core.services.blocking import run_blocking
from core.services.request_builder import build_invocation
from core.services.response_decoder import aggregate_stream, decode_envelope, decode_stdout

log = get_logger(__name__)


class DaemonBridge:
    """Caller-facing operations against the local inference daemon."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        transport: DaemonTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport or build_transport(self._settings)

    @property
    def transport(self) -> DaemonTransport:
        return self._transport

    async def _invoke(self, request: DaemonRequest, operation: str) -> RawOutput:
        invocation = build_invocation(
            request,
            base_url=self._settings.daemon_base_url,
            encoding=self._settings.body_encoding,
        )
        log.debug(
            "daemon.request.dispatch",
            operation=operation,
            method=invocation.method,
            url=invocation.url,
            transport=self._transport.name,
            body_chars=len(invocation.body) if invocation.body is not None else 0,
        )
        try:
            raw = await run_blocking(self._transport.execute, invocation)
        except BridgeError as exc:
            log.warning("daemon.request.error", operation=operation, code=exc.code, error=exc.detail)
            raise

        log.debug(
            "daemon.request.done",
            operation=operation,
            returncode=raw.returncode,
            stdout_bytes=len(raw.stdout),
            stderr_bytes=len(raw.stderr),
        )
        return raw

    async def list_models(self) -> OperationResult:
        """Raw listing JSON from the daemon, wrapped in an envelope.

        A failed call or undecodable output becomes a failure envelope;
        spawn and dispatch failures raise.
        """

        raw = await self._invoke(ListModelsRequest(), "list_models")
        result = decode_envelope(raw)
        if not result.success:
            log.warning("daemon.list_models.failed", error=result.error)
        return result

    async def generate(self, model: str, prompt: str) -> str:
        raw = await self._invoke(GenerateRequest(model=model, prompt=prompt), "generate")
        try:
            text = aggregate_stream(decode_stdout(raw))
        except BridgeError as exc:
            log.warning("daemon.generate.failed", model=model, code=exc.code, error=exc.detail)
            raise
        log.info("daemon.generate.done", model=model, response_chars=len(text))
        return text

    async def pull(self, name: str) -> OperationResult:
        """Install `name`, then return a fresh model listing."""

        await self._confirm(PullRequest(name=name), "pull")
        return await self.list_models()

    async def delete(self, name: str) -> OperationResult:
        """Remove `name`, then return a fresh model listing."""

        await self._confirm(DeleteRequest(name=name), "delete")
        return await self.list_models()

    async def _confirm(self, request: DaemonRequest, operation: str) -> None:
        # The daemon's own confirmation payload is discarded; only a clean
        # exit with decodable output counts as success.
        raw = await self._invoke(request, operation)
        try:
            decode_stdout(raw)
        except BridgeError as exc:
            log.warning(f"daemon.{operation}.failed", code=exc.code, error=exc.detail)
            raise
        log.info(f"daemon.{operation}.done")
