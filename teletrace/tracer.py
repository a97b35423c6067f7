"""The tracer that starts spans, and the process-wide tracer instance."""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime
from typing import TypeVar

from teletrace.core import KeyValue, SpanContext, empty_span_context
from teletrace.current import get_current_span, use_span
from teletrace.span import Span

T = TypeVar("T")


class Tracer:
    """Starts spans as children of a given remote context or of the current span."""

    def __init__(self) -> None:
        self.name = ""
        self.component = ""
        self.resources: tuple[KeyValue, ...] = ()

    def start(
        self,
        name: str,
        *,
        parent: SpanContext | None = None,
        record: bool = False,
        start_time: datetime | None = None,
    ) -> Span:
        """Start a span.

        A non-empty ``parent`` is treated as a remote parent; otherwise the
        current span, if it is one of ours, becomes the local parent.
        """
        remote_parent = False
        if parent is not None and parent != empty_span_context():
            remote_parent = True
        else:
            parent = None
            current = get_current_span()
            if isinstance(current, Span):
                current._add_child()
                parent = current.span_context
        return Span(
            name,
            parent=parent,
            remote_parent=remote_parent,
            record=record,
            start_time=start_time,
            tracer=self,
        )

    def with_span(self, name: str, body: Callable[[Span], T]) -> T:
        """Run ``body`` inside a new current span, ending it afterwards."""
        span = self.start(name)
        try:
            with use_span(span):
                return body(span)
        finally:
            span.end()

    def with_service(self, name: str) -> Tracer:
        self.name = name
        return self

    def with_resources(self, *args: KeyValue) -> Tracer:
        self.resources = tuple(args)
        return self

    def with_component(self, component: str) -> Tracer:
        self.component = component
        return self


_lock = threading.Lock()
_tracer: Tracer | None = None


def register() -> Tracer:
    """Create the process-wide tracer on first call and return it."""
    global _tracer
    with _lock:
        if _tracer is None:
            _tracer = Tracer()
        return _tracer