import dataclasses

import pytest

from teletrace.core import KeyValue, SpanContext
from teletrace.export import Event, SpanBatcher, SpanData, SpanSyncer, StatusCode


def test_span_data_defaults():
    sd = SpanData()
    assert sd.status is StatusCode.OK
    assert sd.attributes == []
    assert sd.message_events == []
    assert sd.links == []
    assert not sd.span_context.is_valid()


def test_span_data_lists_are_independent():
    a = SpanData()
    b = SpanData()
    a.attributes.append(KeyValue("key1", "value1"))
    assert b.attributes == []


def test_span_data_replace_copies_fields():
    sc = SpanContext(trace_id=1, span_id=2, trace_flags=1)
    sd = SpanData(span_context=sc, name="span0", has_remote_parent=True)
    copy = dataclasses.replace(sd, name="other")
    assert copy.span_context == sc
    assert copy.has_remote_parent
    assert sd.name == "span0"
    assert copy.name == "other"


def test_event_holds_message_and_attributes():
    kv = KeyValue("key1", "value1")
    ev = Event("foo", [kv])
    assert ev.message == "foo"
    assert ev.attributes == [kv]
    assert ev.time is None


def test_exporter_interfaces_are_abstract():
    with pytest.raises(TypeError):
        SpanSyncer()
    with pytest.raises(TypeError):
        SpanBatcher()


def test_syncer_subclass_receives_span():
    class Collect(SpanSyncer):
        def __init__(self):
            self.spans = []

        def export_span(self, span_data):
            self.spans.append(span_data)

    exporter = Collect()
    sd = SpanData(name="x")
    exporter.export_span(sd)
    assert exporter.spans == [sd]


def test_batcher_subclass_receives_batch():
    class Collect(SpanBatcher):
        def __init__(self):
            self.sizes = []

        def export_spans(self, spans):
            self.sizes.append(len(spans))

    exporter = Collect()
    exporter.export_spans([SpanData(), SpanData()])
    assert exporter.sizes == [2]