"""Render daemon requests into transport invocations.

Two body encoders are available:
- `BodyEncoding.JSON`: structured serialization; quotes, backslashes and
  control characters in caller values are escaped.
- `BodyEncoding.TEMPLATE`: the legacy fixed template
  ``{ "model": "<model>", "prompt": "<prompt>" }``. Values are interpolated
  verbatim with no escaping, so a value containing ``"`` or ``\\`` yields a
  malformed body. Known limitation, kept for front ends that depend on the
  exact legacy bytes.
"""

from __future__ import annotations

import json

from core.domain.models import BodyEncoding, DaemonRequest, HttpInvocation


def render_body(fields: dict[str, str], encoding: BodyEncoding = BodyEncoding.JSON) -> str:
    if encoding is BodyEncoding.TEMPLATE:
        pairs = ", ".join(f'"{key}": "{value}"' for key, value in fields.items())
        return "{ " + pairs + " }"
    return json.dumps(fields, ensure_ascii=False)


def build_invocation(
    request: DaemonRequest,
    *,
    base_url: str,
    encoding: BodyEncoding = BodyEncoding.JSON,
) -> HttpInvocation:
    """Build the method/URL/body descriptor for `request` against `base_url`."""

    url = base_url.rstrip("/") + request.path
    fields = request.body_fields()
    body = render_body(fields, encoding) if fields is not None else None
    return HttpInvocation(method=request.method, url=url, body=body)
