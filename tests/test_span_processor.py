import pytest

from teletrace.export import SpanData
from teletrace.span_processor import (
    SpanProcessor,
    register_span_processor,
    registered_span_processors,
    unregister_span_processor,
)


class RecordingProcessor(SpanProcessor):
    def __init__(self):
        self.started = []
        self.ended = []
        self.shutdown_count = 0

    def on_start(self, span_data):
        self.started.append(span_data)

    def on_end(self, span_data):
        self.ended.append(span_data)

    def shutdown(self):
        self.shutdown_count += 1


@pytest.fixture
def processor():
    proc = RecordingProcessor()
    yield proc
    if proc in registered_span_processors():
        unregister_span_processor(proc)


def test_span_processor_is_abstract():
    with pytest.raises(TypeError):
        SpanProcessor()


def test_register_adds_processor(processor):
    register_span_processor(processor)
    assert processor in registered_span_processors()


def test_register_twice_keeps_single_entry(processor):
    register_span_processor(processor)
    register_span_processor(processor)
    assert registered_span_processors().count(processor) == 1


def test_registration_order_is_kept(processor):
    other = RecordingProcessor()
    register_span_processor(processor)
    register_span_processor(other)
    try:
        procs = registered_span_processors()
        assert procs.index(processor) < procs.index(other)
    finally:
        unregister_span_processor(other)


def test_unregister_removes_and_shuts_down(processor):
    register_span_processor(processor)
    unregister_span_processor(processor)
    assert processor not in registered_span_processors()
    assert processor.shutdown_count == 1


def test_multiple_unregister_calls_shut_down_once(processor):
    register_span_processor(processor)
    unregister_span_processor(processor)
    unregister_span_processor(processor)
    assert processor.shutdown_count == 1


def test_unregister_unknown_processor_does_not_shut_down(processor):
    unregister_span_processor(processor)
    assert processor.shutdown_count == 0


def test_reregistered_processor_is_shut_down_again(processor):
    register_span_processor(processor)
    unregister_span_processor(processor)
    register_span_processor(processor)
    unregister_span_processor(processor)
    assert processor.shutdown_count == 2


def test_shutdown_increments_counter(processor):
    processor.shutdown()
    assert processor.shutdown_count == 1


def test_snapshot_is_not_affected_by_later_changes(processor):
    before = registered_span_processors()
    register_span_processor(processor)
    assert processor not in before
    assert processor in registered_span_processors()


def test_registered_processor_receives_calls(processor):
    register_span_processor(processor)
    data = SpanData(name="span")
    for proc in registered_span_processors():
        proc.on_start(data)
        proc.on_end(data)
    assert processor.started == [data]
    assert processor.ended == [data]