"""Span context, attribute and link types shared across the package."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any

TRACE_FLAGS_SAMPLED = 0x01
TRACE_FLAGS_UNUSED = 0xFE


@dataclass(frozen=True)
class SpanContext:
    """Identity of a span: a 128-bit trace id, a 64-bit span id and trace flags."""

    trace_id: int = 0
    span_id: int = 0
    trace_flags: int = 0

    def is_valid(self) -> bool:
        """A context is valid when both its trace id and span id are non-zero."""
        return self.trace_id != 0 and self.span_id != 0

    def is_sampled(self) -> bool:
        return self.trace_flags & TRACE_FLAGS_SAMPLED == TRACE_FLAGS_SAMPLED

    def trace_id_string(self) -> str:
        return f"{self.trace_id:032x}"

    def span_id_string(self) -> str:
        return f"{self.span_id:016x}"


def empty_span_context() -> SpanContext:
    """Return the context that carries no trace at all."""
    return SpanContext()


@dataclass(frozen=True)
class KeyValue:
    """A single attribute: a key and its value."""

    key: str
    value: Any


@dataclass(frozen=True)
class Link:
    """A reference from one span to another span's context."""

    span_context: SpanContext
    attributes: tuple[KeyValue, ...] = ()


class IDGenerator(abc.ABC):
    """Source of new trace and span identifiers."""

    @abc.abstractmethod
    def new_trace_id(self) -> int:
        """Return a new non-zero 128-bit trace id."""

    @abc.abstractmethod
    def new_span_id(self) -> int:
        """Return a new non-zero 64-bit span id."""