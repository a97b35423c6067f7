"""Span processor that exports each sampled span as soon as it ends."""

from __future__ import annotations

import threading

from teletrace.export import SpanData, SpanSyncer
from teletrace.span_processor import SpanProcessor


class SimpleSpanProcessor(SpanProcessor):
    """Hands every ended, sampled span to a synchronous exporter."""

    def __init__(self, exporter: SpanSyncer | None) -> None:
        self.exporter = exporter
        self._started = 0
        self._lock = threading.Lock()

    @property
    def started(self) -> int:
        """Number of spans whose start this processor has seen."""
        with self._lock:
            return self._started

    def on_start(self, span_data: SpanData) -> None:
        """Count the started span; nothing is exported on start."""
        with self._lock:
            self._started += 1

    def on_end(self, span_data: SpanData) -> None:
        """Export the span if it is sampled and an exporter is set."""
        if self.exporter is not None and span_data.span_context.is_sampled():
            self.exporter.export_span(span_data)

    def shutdown(self) -> None:
        """Drop the exporter so that no further spans are exported."""
        self.exporter = None