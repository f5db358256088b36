"""Decode raw transport output.

Two modes:
- Single envelope (list, pull, delete): strict UTF-8 text, returned as-is.
  No JSON validation happens here; the raw text is the payload.
- Streaming (generate): newline-delimited JSON fragments whose `response`
  values are concatenated in order. Lines that do not parse are skipped;
  the daemon may emit keepalive or other non-JSON lines. `done` is read
  but never stops decoding early.
"""

from __future__ import annotations

from typing import Iterator

from pydantic import ValidationError

from core.domain.errors import CommandFailedError, OutputDecodeError
from core.domain.models import OperationResult, RawOutput, StreamFragment


def decode_stdout(raw: RawOutput) -> str:
    """Return stdout as text, or raise for a failed call / invalid UTF-8.

    A failed call reports stderr only; stdout is never part of the message.
    """

    if not raw.succeeded:
        raise CommandFailedError(raw.stderr.decode("utf-8", errors="replace"))
    try:
        return raw.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise OutputDecodeError(str(exc)) from exc


def decode_envelope(raw: RawOutput) -> OperationResult:
    try:
        return OperationResult.ok(decode_stdout(raw))
    except (CommandFailedError, OutputDecodeError) as exc:
        return OperationResult.fail(exc.message)


def iter_fragments(text: str) -> Iterator[StreamFragment]:
    # Split on "\n" only: JSON strings may legally hold U+2028 and friends.
    for line in text.split("\n"):
        line = line.rstrip("\r")
        try:
            yield StreamFragment.model_validate_json(line)
        except ValidationError:
            continue


def aggregate_stream(text: str) -> str:
    return "".join(fragment.response for fragment in iter_fragments(text))
