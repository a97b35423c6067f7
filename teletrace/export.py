"""Data collected by spans and the interfaces exporters implement."""

from __future__ import annotations

import abc
import enum
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from teletrace.core import KeyValue, Link, SpanContext


class StatusCode(enum.IntEnum):
    """Canonical status codes a span may end with."""

    OK = 0
    CANCELED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16


@dataclass
class Event:
    """A message with attributes, recorded at a point in time."""

    message: str
    attributes: list[KeyValue] = field(default_factory=list)
    time: datetime | None = None


@dataclass
class SpanData:
    """Everything recorded about a span."""

    span_context: SpanContext = field(default_factory=SpanContext)
    parent_span_id: int = 0
    span_kind: int = 0
    name: str = ""
    start_time: datetime | None = None
    end_time: datetime | None = None
    attributes: list[KeyValue] = field(default_factory=list)
    message_events: list[Event] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    status: StatusCode = StatusCode.OK
    has_remote_parent: bool = False
    dropped_attribute_count: int = 0
    dropped_message_event_count: int = 0
    dropped_link_count: int = 0
    child_span_count: int = 0


class SpanSyncer(abc.ABC):
    """Receives each sampled span synchronously as it ends."""

    @abc.abstractmethod
    def export_span(self, span_data: SpanData) -> None:
        """Export one span; must not block for long."""


class SpanBatcher(abc.ABC):
    """Receives batches of sampled spans."""

    @abc.abstractmethod
    def export_spans(self, spans: Sequence[SpanData]) -> None:
        """Export a batch of spans; must not block for long."""