# teletrace

teletrace is a small library for distributed tracing. With it you can:

- start spans and record attributes, events, links and a status on them;
- decide which traces are sampled;
- hand finished spans to your own exporters, one at a time or in batches;
- carry span contexts between processes in three formats: W3C
  `traceparent`, B3 (a single header or several), and a compact binary form.

It has no dependencies outside the standard library.

## Installation

```
pip install teletrace
```

## Tracing

```python
from teletrace.config import Config, apply_config
from teletrace.sampling import always_sample
from teletrace.simple_processor import SimpleSpanProcessor
from teletrace.span_processor import register_span_processor
from teletrace.tracer import register


class PrintExporter:
    def export_span(self, span_data):
        print(span_data.name, span_data.span_context.trace_id_string())


apply_config(Config(default_sampler=always_sample()))
register_span_processor(SimpleSpanProcessor(PrintExporter()))

tracer = register()
span = tracer.start("handle-request")
span.set_name("handle-request /users")
span.end()
```

`register()` creates the process-wide `Tracer` the first time it is called.
Every later call returns that same tracer.

`Tracer.start(name, parent=..., record=..., start_time=...)` starts a `Span`:

- If you pass a non-empty `parent` `SpanContext`, the new span is the child of
  that remote context.
- Otherwise, if a `Span` is current, the new span becomes its child and the
  parent's `child_span_count` goes up by one.

A span records data only when it is sampled or when `record=True` is passed.
A span that does not record only carries its context.

A recording span has these methods:

- `set_attribute` and `set_attributes` take `KeyValue` items.
- `add_event` and `add_event_with_timestamp` record events.
- `add_link` and `link` record links.
- `set_status` takes a `StatusCode`.
- `set_name` renames the span and asks the sampler again.

`end(end_time=None)` hands a `SpanData` snapshot to every registered
processor. This happens only once per span. Without `end_time`, the end time
is the present time, and it is never earlier than the start time.

`Tracer.with_span(name, body)` starts a span and calls `body(span)` with that
span as the current one. It ends the span afterwards, even when `body`
raises. `teletrace.current.get_current_span()` returns the current span. When
no span is current, it returns a `NonRecordingSpan` with an empty context.
`use_span(span)` is a context manager that makes `span` current.

### Limits and sampling

`apply_config(Config(...))` merges the fields you set into the global
configuration and leaves the others as they are. `current_config()` returns
the configuration in effect.

Each span has limits on how much it keeps:

| Kept per span | Default limit | What is dropped when full |
|---------------|---------------|---------------------------|
| Attributes | 32 | The least recently set key |
| Events | 128 | The oldest entry |
| Links | 32 | The oldest entry |

The number of dropped items is reported in `SpanData`.

There are three samplers in `teletrace.sampling`:

- `probability_sampler(fraction)` samples that fraction of traces, decided
  from the trace id. It also samples every span whose parent is sampled.
- `always_sample()` samples every trace.
- `never_sample()` samples no trace.

The default sampler is `probability_sampler(1e-4)`. Trace and span ids come
from `DefaultIDGenerator` unless you set another `IDGenerator`.

### Processors

`register_span_processor` registers a processor. `unregister_span_processor`
removes it and shuts it down, and it does so only if the processor was
registered. `registered_span_processors()` lists the registered processors in
the order they were added.

- `SimpleSpanProcessor(exporter)` hands each sampled span to
  `exporter.export_span(span_data)` as soon as the span ends. Its `shutdown()`
  drops the exporter.
- `BatchSpanProcessor(exporter, ...)` queues spans as they end. A background
  thread passes the sampled ones to `exporter.export_spans(spans)`.
  - Keyword options: `max_queue_size` (default 2048), `scheduled_delay` in
    seconds (default 5.0), `max_export_batch_size` (default 512) and
    `block_on_queue_full` (default `False`).
  - When the queue is full, a new span is dropped and counted in `dropped`.
    With `block_on_queue_full=True`, `on_end` waits for space instead.
  - `shutdown()` flushes the queue and waits for the export to finish. The
    processor also works as a context manager that shuts it down on exit.
  - Passing `None` as the exporter raises `ValueError`.

`SpanSyncer` and `SpanBatcher` in `teletrace.export` are abstract base classes
for the two exporter shapes. Any object with the right method also works.

## Propagation

`HTTPTraceContextPropagator` and `HTTPB3Propagator` each have three methods:

- `inject(carrier, span=None)` writes headers into a mutable mapping. It uses
  the given span or `SpanContext`, or else the current span. It writes nothing
  when the context is not valid.
- `extract(carrier)` reads a `SpanContext` from a mapping. If the exact header
  name is not present, it looks the name up without regard to case.
- `get_all_keys()` returns the header names the propagator uses.

```python
from teletrace.tracecontext import HTTPTraceContextPropagator

headers = {"Traceparent": "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01"}
sc = HTTPTraceContextPropagator().extract(headers)
assert sc.is_sampled()
```

`HTTPB3Propagator(single_header=True)` uses the single `X-B3` header. By
default it uses the separate `X-B3-TraceId`, `X-B3-SpanId` and `X-B3-Sampled`
headers, and it also honours `X-B3-Flags` when it extracts.

`BinaryPropagator().to_bytes(sc)` encodes a `SpanContext` as 29 bytes. The
empty context encodes as `b""`. `from_bytes(data)` decodes it back.

Extraction never raises. A missing, malformed or invalid value gives the empty
span context (`empty_span_context()`).

## Helpers

`teletrace.internal` has these helpers:

- `version()` returns the release version.
- `user_agent()` returns the agent string `teletrace/<version>`.
- `sanitize(s)` truncates a label key to 100 characters and replaces
  characters that are not letters or digits with `_`. It prefixes `key` when
  the result starts with a digit or `_`.

`teletrace.collections` provides the capacity-limited `EvictedQueue` and
`LruMap` that spans use.

## What it does not do

teletrace ships no exporters to any tracing backend, no network or file
output, and no command-line tool. You supply the exporter objects that
receive `SpanData`. The package only collects spans and hands them over.

## Development

```
pip install -e ".[test]"
pytest
```