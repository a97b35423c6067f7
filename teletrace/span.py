"""The span: a timed, recorded operation within a trace."""

from __future__ import annotations

import dataclasses
import threading
from datetime import datetime, timezone
from typing import Any

from teletrace.collections import EvictedQueue, LruMap
from teletrace.config import Config, current_config
from teletrace.core import (
    TRACE_FLAGS_SAMPLED,
    KeyValue,
    Link,
    SpanContext,
    empty_span_context,
)
from teletrace.export import Event, SpanData, StatusCode
from teletrace.internal import monotonic_end_time
from teletrace.sampling import SamplingParameters
from teletrace.span_processor import registered_span_processors


class Span:
    """A span that records attributes, events and links while it is sampled.

    A span that is neither sampled nor asked to record only carries its
    context so that the trace id is propagated.
    """

    def __init__(
        self,
        name: str,
        *,
        parent: SpanContext | None = None,
        remote_parent: bool = False,
        record: bool = False,
        start_time: datetime | None = None,
        tracer: Any = None,
    ) -> None:
        cfg = current_config()
        if parent is None:
            parent = empty_span_context()
        no_parent = parent == empty_span_context()
        generator = cfg.id_generator
        trace_id = generator.new_trace_id() if no_parent else parent.trace_id
        self._span_context = SpanContext(
            trace_id=trace_id,
            span_id=generator.new_span_id(),
            trace_flags=parent.trace_flags,
        )
        self._lock = threading.Lock()
        self._ended = False
        self._data: SpanData | None = None
        self._attributes: LruMap | None = None
        self._events: EvictedQueue | None = None
        self._links: EvictedQueue | None = None
        self.tracer = tracer

        self._make_sampling_decision(
            no_parent=no_parent,
            remote_parent=remote_parent,
            parent=parent,
            name=name,
            cfg=cfg,
        )
        if not self._span_context.is_sampled() and not record:
            return

        self._data = SpanData(
            span_context=self._span_context,
            parent_span_id=0 if no_parent else parent.span_id,
            name=name,
            start_time=start_time if start_time is not None else datetime.now(timezone.utc),
            has_remote_parent=remote_parent,
        )
        self._attributes = LruMap(cfg.max_attributes_per_span)
        self._events = EvictedQueue(cfg.max_events_per_span)
        self._links = EvictedQueue(cfg.max_links_per_span)

        for processor in registered_span_processors():
            processor.on_start(self._data)

    @property
    def span_context(self) -> SpanContext:
        return self._span_context

    def is_recording(self) -> bool:
        return self._data is not None

    def set_status(self, status: StatusCode) -> None:
        if self._data is None:
            return
        with self._lock:
            self._data.status = status

    def set_attribute(self, attribute: KeyValue) -> None:
        self.set_attributes(attribute)

    def set_attributes(self, *args: KeyValue) -> None:
        """Record attributes; once full, the least recently set key is dropped."""
        if self._attributes is None:
            return
        with self._lock:
            for attribute in args:
                self._attributes.add(attribute.key, attribute.value)

    def end(self, end_time: datetime | None = None) -> None:
        """Finish the span and hand its data to the registered processors, once."""
        if self._data is None:
            return
        with self._lock:
            if self._ended:
                return
            self._ended = True
        processors = registered_span_processors()
        if not processors:
            return
        span_data = self._make_span_data()
        if end_time is None:
            span_data.end_time = monotonic_end_time(span_data.start_time)
        else:
            span_data.end_time = end_time
        for processor in processors:
            processor.on_end(span_data)

    def add_event(self, message: str, *args: KeyValue) -> None:
        if self._data is None:
            return
        self._add_event(datetime.now(timezone.utc), message, args)

    def add_event_with_timestamp(
        self, timestamp: datetime, message: str, *args: KeyValue
    ) -> None:
        if self._data is None:
            return
        self._add_event(timestamp, message, args)

    def set_name(self, name: str) -> None:
        """Rename the span and consult the sampler again."""
        if self._data is None:
            return
        self._data.name = name
        no_parent = self._data.parent_span_id == 0
        parent = empty_span_context() if no_parent else self._data.span_context
        self._make_sampling_decision(
            no_parent=no_parent,
            remote_parent=self._data.has_remote_parent,
            parent=parent,
            name=name,
            cfg=current_config(),
        )

    def add_link(self, link: Link) -> None:
        """Add a link; once full, the oldest link is dropped."""
        if self._links is None:
            return
        with self._lock:
            self._links.add(link)

    def link(self, span_context: SpanContext, *args: KeyValue) -> None:
        self.add_link(Link(span_context=span_context, attributes=tuple(args)))

    def _add_event(
        self, timestamp: datetime, message: str, attributes: tuple[KeyValue, ...]
    ) -> None:
        with self._lock:
            self._events.add(
                Event(message=message, attributes=list(attributes), time=timestamp)
            )

    def _add_child(self) -> None:
        if self._data is None:
            return
        with self._lock:
            self._data.child_span_count += 1

    def _make_span_data(self) -> SpanData:
        with self._lock:
            data = self._data
            span_data = dataclasses.replace(
                data,
                attributes=list(data.attributes),
                message_events=list(data.message_events),
                links=list(data.links),
            )
            if len(self._attributes) > 0:
                span_data.attributes = [
                    KeyValue(key, value) for key, value in self._attributes.items()
                ]
                span_data.dropped_attribute_count = self._attributes.dropped_count
            if len(self._events) > 0:
                span_data.message_events = self._events.items()
                span_data.dropped_message_event_count = self._events.dropped_count
            if len(self._links) > 0:
                span_data.links = self._links.items()
                span_data.dropped_link_count = self._links.dropped_count
            return span_data

    def _make_sampling_decision(
        self,
        *,
        no_parent: bool,
        remote_parent: bool,
        parent: SpanContext,
        name: str,
        cfg: Config,
    ) -> None:
        # A child of a local span keeps its parent's flags.
        if not (no_parent or remote_parent):
            return
        sc = self._span_context
        decision = cfg.default_sampler(
            SamplingParameters(
                parent_context=parent,
                trace_id=sc.trace_id,
                span_id=sc.span_id,
                name=name,
                has_remote_parent=remote_parent,
            )
        )
        if decision.sample:
            flags = sc.trace_flags | TRACE_FLAGS_SAMPLED
        else:
            flags = sc.trace_flags & ~TRACE_FLAGS_SAMPLED & 0xFF
        self._span_context = dataclasses.replace(sc, trace_flags=flags)