"""Tracking of the span that is current in the running context."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from teletrace.core import SpanContext, empty_span_context

_current_span: ContextVar[Any] = ContextVar("teletrace_current_span", default=None)


@dataclass
class NonRecordingSpan:
    """A span that only carries a context and records nothing."""

    span_context: SpanContext = field(default_factory=empty_span_context)
    ended: bool = field(default=False, compare=False)

    def is_recording(self) -> bool:
        return False

    def end(self, end_time: datetime | None = None) -> None:
        """Mark the span as ended; nothing is recorded or exported."""
        self.ended = True


def get_current_span() -> Any:
    """Return the current span, or a non-recording span with an empty context."""
    span = _current_span.get()
    return NonRecordingSpan() if span is None else span


@contextmanager
def use_span(span: Any) -> Iterator[Any]:
    """Make ``span`` current for the duration of the ``with`` block."""
    token = _current_span.set(span)
    try:
        yield span
    finally:
        _current_span.reset(token)