"""Offload blocking work from the event loop.

Subprocess calls and synchronous HTTP fetches run on the worker threads
behind `asyncio.to_thread`; the awaiting coroutine suspends until the
worker finishes. Bridge errors raised inside the worker propagate
unchanged. Anything else means the work could not be scheduled or joined
and is reported as `DispatchError`.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, TypeVar

from core.domain.errors import BridgeError, DispatchError

T = TypeVar("T")


async def run_blocking(func: Callable[..., T], /, *args: Any) -> T:
    try:
        return await asyncio.to_thread(func, *args)
    except BridgeError:
        raise
    except Exception as exc:
        raise DispatchError(str(exc) or exc.__class__.__name__) from exc
