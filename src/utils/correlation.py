"""Lightweight correlation ID utilities for structured logging.

Provides a per-request correlation identifier via a ContextVar so that
every log record emitted while serving a tool call carries the same
``req_id``. The HTTP layer sets it from ``x-correlation-id``; calls that
arrive without one (stdio, direct use) get a fresh id for their duration.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

_request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def set_request_id(request_id: str) -> None:
    """Set the current request correlation id in a context variable."""
    _request_id_var.set(request_id)


def get_request_id() -> str:
    """Return the current request correlation id, or empty string."""
    return _request_id_var.get()


@contextmanager
def request_scope() -> Iterator[str]:
    """Yield the current correlation id, or a fresh one while the block runs.

    A fresh id is removed again on exit, so consecutive calls in the same
    context never share it.
    """
    current = _request_id_var.get()
    if current:
        yield current
        return
    token = _request_id_var.set(uuid.uuid4().hex[:12])
    try:
        yield _request_id_var.get()
    finally:
        _request_id_var.reset(token)
