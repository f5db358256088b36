"""Domain models (Pydantic v2).

These models describe *what* travels through the bridge (requests, raw
process output, stream fragments, normalized results), not *how* it is
fetched.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class TransportKind(str, Enum):
    """Available ways of executing a daemon request."""

    CURL = "curl"
    HTTPX = "httpx"


class BodyEncoding(str, Enum):
    """How request fields are rendered into a request body."""

    JSON = "json"
    TEMPLATE = "template"


class DaemonRequest(BaseModel):
    """Base of the four daemon requests.

    Subclasses pin the HTTP method and endpoint path. Field values are
    passed through verbatim; nothing here validates model or prompt names.
    """

    model_config = ConfigDict(frozen=True)

    method: ClassVar[str]
    path: ClassVar[str]

    def body_fields(self) -> dict[str, str] | None:
        """Ordered fields of the request body, or None for body-less requests."""

        fields = self.model_dump()
        return fields or None


class ListModelsRequest(DaemonRequest):
    method: ClassVar[str] = "GET"
    path: ClassVar[str] = "/api/tags"


class GenerateRequest(DaemonRequest):
    method: ClassVar[str] = "POST"
    path: ClassVar[str] = "/api/generate"

    model: str = Field(..., description="Installed model to generate with.")
    prompt: str = Field(..., description="Prompt text, sent as-is.")


class PullRequest(DaemonRequest):
    method: ClassVar[str] = "POST"
    path: ClassVar[str] = "/api/pull"

    name: str = Field(..., description="Model name to install.")


class DeleteRequest(DaemonRequest):
    method: ClassVar[str] = "DELETE"
    path: ClassVar[str] = "/api/delete"

    name: str = Field(..., description="Installed model name to remove.")


@dataclass(frozen=True)
class HttpInvocation:
    """Fully-formed request descriptor handed to a transport."""

    method: str
    url: str
    body: str | None = None


@dataclass(frozen=True)
class RawOutput:
    """Captured output of one transport call."""

    stdout: bytes
    stderr: bytes
    returncode: int

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


class StreamFragment(BaseModel):
    """One line of a streaming generate response."""

    model_config = ConfigDict(extra="ignore", strict=True)

    response: str
    done: bool | None = None


class OperationResult(BaseModel):
    """Normalized `{success, data, error}` envelope returned to the front end."""

    success: bool = Field(..., description="Whether the operation succeeded.")
    data: str | None = Field(default=None, description="Payload on success.")
    error: str | None = Field(default=None, description="Human readable error on failure.")

    @classmethod
    def ok(cls, data: str) -> "OperationResult":
        return cls(success=True, data=data, error=None)

    @classmethod
    def fail(cls, error: str) -> "OperationResult":
        return cls(success=False, data=None, error=error)

    def to_json(self) -> str:
        """Pretty JSON with the field order `success`, `data`, `error`."""

        return json.dumps(self.model_dump(mode="json"), ensure_ascii=False, indent=2)
