"""Correlation ID propagation for request tracing."""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

CORRELATION_ID_HEADER = "X-Correlation-ID"

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Current correlation ID, or "" outside a request."""
    return _correlation_id.get()


@contextmanager
def bind_correlation_id(cid: str | None = None) -> Iterator[str]:
    """Bind a correlation ID for the duration of the block.

    Generates a UUID4 when cid is empty. Restores the previous value on exit.
    """
    value = cid or str(uuid.uuid4())
    token = _correlation_id.set(value)
    try:
        yield value
    finally:
        _correlation_id.reset(token)
