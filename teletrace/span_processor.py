"""Hooks called as spans start and end, and the global registry of them."""

from __future__ import annotations

import abc
import threading

from teletrace.export import SpanData


class SpanProcessor(abc.ABC):
    """Receives span data when spans start and when they end."""

    @abc.abstractmethod
    def on_start(self, span_data: SpanData) -> None:
        """Called synchronously when a span starts; must not block."""

    @abc.abstractmethod
    def on_end(self, span_data: SpanData) -> None:
        """Called synchronously when a span ends; must not block."""

    @abc.abstractmethod
    def shutdown(self) -> None:
        """Release the processor's resources; no further calls follow."""


_lock = threading.Lock()
_processors: tuple[SpanProcessor, ...] = ()


def registered_span_processors() -> tuple[SpanProcessor, ...]:
    """Return the processors currently registered, in registration order."""
    return _processors


def register_span_processor(processor: SpanProcessor) -> None:
    """Add ``processor`` to those that receive span start and end calls."""
    global _processors
    with _lock:
        if processor not in _processors:
            _processors = (*_processors, processor)


def unregister_span_processor(processor: SpanProcessor) -> None:
    """Remove ``processor`` and shut it down if it was registered."""
    global _processors
    with _lock:
        registered = processor in _processors
        if registered:
            _processors = tuple(p for p in _processors if p is not processor)
    if registered:
        processor.shutdown()