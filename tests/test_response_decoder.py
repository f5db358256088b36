"""Tests for raw output decoding: envelope passthrough and NDJSON streams."""
import pytest

from conftest import failed, ok
from core.domain.errors import CommandFailedError, OutputDecodeError
from core.services.response_decoder import (
    aggregate_stream,
    decode_envelope,
    decode_stdout,
    iter_fragments,
)


def test_aggregate_concatenates_responses_in_order() -> None:
    text = '{"response":"The "}\n{"response":"sky "}\n{"response":"is blue","done":true}\n'
    assert aggregate_stream(text) == "The sky is blue"


def test_aggregate_skips_garbage_lines_and_keeps_going() -> None:
    text = '{"response":"Hel"}\ngarbage\n{"response":"lo"}'
    assert aggregate_stream(text) == "Hello"


def test_done_does_not_stop_decoding() -> None:
    text = '{"response":"a","done":false}\n{"response":"b","done":true}\n{"response":"c"}\n'
    assert aggregate_stream(text) == "abc"


def test_crlf_lines_and_blank_lines() -> None:
    text = '{"response":"x"}\r\n\r\n{"response":"y"}\r\n'
    assert aggregate_stream(text) == "xy"


def test_fragments_without_response_are_skipped() -> None:
    text = '{"done":true}\n[1,2]\n{"response":"kept","model":"llama3","context":[1,2]}\n'
    fragments = list(iter_fragments(text))
    assert [f.response for f in fragments] == ["kept"]
    assert fragments[0].done is None


def test_line_separator_inside_json_string_is_not_a_line_break() -> None:
    text = '{"response":"a\u2028b"}\n'
    assert aggregate_stream(text) == "a\u2028b"


def test_empty_stream_yields_empty_text() -> None:
    assert aggregate_stream("") == ""


def test_decode_stdout_returns_text_verbatim() -> None:
    assert decode_stdout(ok("not json at all")) == "not json at all"


def test_nonzero_exit_reports_stderr_not_stdout() -> None:
    raw = failed("curl: (7) Failed to connect", stdout=b"STDOUT-SECRET")
    with pytest.raises(CommandFailedError) as exc_info:
        decode_stdout(raw)
    message = str(exc_info.value)
    assert message == "Command executed with failing error code: curl: (7) Failed to connect"
    assert "STDOUT-SECRET" not in message


def test_invalid_utf8_is_a_distinct_error() -> None:
    with pytest.raises(OutputDecodeError) as exc_info:
        decode_stdout(ok(b"\xff\xfe\xfa"))
    assert str(exc_info.value).startswith("Failed to parse output: ")


def test_decode_envelope_success() -> None:
    result = decode_envelope(ok('{"models":[]}'))
    assert result.success is True
    assert result.data == '{"models":[]}'
    assert result.error is None


def test_decode_envelope_failure_carries_stderr() -> None:
    result = decode_envelope(failed("boom", stdout=b"ignored"))
    assert result.success is False
    assert result.data is None
    assert result.error == "Command executed with failing error code: boom"


def test_decode_envelope_invalid_utf8_is_failure() -> None:
    result = decode_envelope(ok(b"\xc3\x28"))
    assert result.success is False
    assert result.error is not None
    assert result.error.startswith("Failed to parse output: ")


def test_fragments_with_non_boolean_done_are_skipped() -> None:
    text = '{"response":"a"}\n{"response":"X","done":"yes"}\n{"response":"b","done":1}\n'
    assert aggregate_stream(text) == "a"


def test_fragments_with_non_string_response_are_skipped() -> None:
    text = '{"response":5}\n{"response":"ok","done":false}\n'
    assert aggregate_stream(text) == "ok"
