"""Trace context propagated to log records across threads and tasks.

The context is a flat dict: ``trace_id`` and ``span_id`` plus any labels bound
by the caller (the in-memory store binds ``store``). ``JsonFormatter`` copies
every key into the emitted record.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING
from uuid import uuid4


if TYPE_CHECKING:
    from collections.abc import Iterator


trace_context: ContextVar[dict | None] = ContextVar("searchx_trace_context", default=None)


def generate_trace_id() -> str:
    """Generate a 32-char hex trace ID."""
    return uuid4().hex


def generate_span_id() -> str:
    """Generate a 16-char hex span ID."""
    return uuid4().hex[:16]


def get_trace_context() -> dict:
    """Get current trace context, creating one on first use."""
    ctx = trace_context.get()
    if ctx is None or not ctx.get("trace_id"):
        ctx = {"trace_id": generate_trace_id(), "span_id": generate_span_id()}
        trace_context.set(ctx)
    return ctx


def set_trace_context(trace_id: str, span_id: str, **extra: object) -> None:
    trace_context.set({"trace_id": trace_id, "span_id": span_id, **extra})


@contextmanager
def bound_trace_context(**values: object) -> Iterator[dict]:
    """Overlay ``values`` on the current context until the block exits."""
    ctx = {**get_trace_context(), **values}
    token = trace_context.set(ctx)
    try:
        yield ctx
    finally:
        trace_context.reset(token)
