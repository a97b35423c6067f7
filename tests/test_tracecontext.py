import pytest

from teletrace.core import TRACE_FLAGS_SAMPLED, SpanContext, empty_span_context
from teletrace.current import NonRecordingSpan, use_span
from teletrace.tracecontext import TRACEPARENT_HEADER, HTTPTraceContextPropagator

TRACE_ID = 0x4BF92F3577B34DA6A3CE929D0E0E4736
SPAN_ID = 0x00F067AA0BA902B7

UNSAMPLED = SpanContext(TRACE_ID, SPAN_ID)
SAMPLED = SpanContext(TRACE_ID, SPAN_ID, TRACE_FLAGS_SAMPLED)

VALID = [
    ("valid header", "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-00", UNSAMPLED),
    ("valid header and sampled", "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01", SAMPLED),
    ("future version", "02-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01", SAMPLED),
    ("future options sampled", "02-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-09", SAMPLED),
    ("future options cleared", "02-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-08", UNSAMPLED),
    ("future additional data", "02-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-09-XYZxsf09", SAMPLED),
    ("ending in dash", "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01-", SAMPLED),
    ("future ending in dash", "01-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-09-", SAMPLED),
]

INVALID = [
    ("wrong version length", "0000-00000000000000000000000000000000-0000000000000000-01"),
    ("wrong trace ID length", "00-ab00000000000000000000000000000000-cd00000000000000-01"),
    ("wrong span ID length", "00-ab000000000000000000000000000000-cd0000000000000000-01"),
    ("wrong trace flag length", "00-ab000000000000000000000000000000-cd00000000000000-0100"),
    ("bogus version", "qw-00000000000000000000000000000000-0000000000000000-01"),
    ("bogus trace ID", "00-qw000000000000000000000000000000-cd00000000000000-01"),
    ("bogus span ID", "00-ab000000000000000000000000000000-qw00000000000000-01"),
    ("bogus trace flag", "00-ab000000000000000000000000000000-cd00000000000000-qw"),
    ("upper case version", "A0-00000000000000000000000000000000-0000000000000000-01"),
    ("upper case trace ID", "00-AB000000000000000000000000000000-cd00000000000000-01"),
    ("upper case span ID", "00-ab000000000000000000000000000000-CD00000000000000-01"),
    ("upper case trace flag", "00-ab000000000000000000000000000000-cd00000000000000-A1"),
    ("zero trace ID and span ID", "00-00000000000000000000000000000000-0000000000000000-01"),
    ("trace-flag unused bits set", "00-ab000000000000000000000000000000-cd00000000000000-09"),
    ("missing options", "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7"),
    ("empty options", "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-"),
]


@pytest.mark.parametrize("name, header, expected", VALID, ids=[c[0] for c in VALID])
def test_extract_valid(name, header, expected):
    assert HTTPTraceContextPropagator().extract({"traceparent": header}) == expected


@pytest.mark.parametrize("name, header", INVALID, ids=[c[0] for c in INVALID])
def test_extract_invalid(name, header):
    result = HTTPTraceContextPropagator().extract({"traceparent": header})
    assert result == empty_span_context()


def test_extract_missing_header():
    assert HTTPTraceContextPropagator().extract({}) == empty_span_context()


@pytest.mark.parametrize(
    "sc, expected",
    [
        (SpanContext(TRACE_ID, 1, TRACE_FLAGS_SAMPLED), "00-4bf92f3577b34da6a3ce929d0e0e4736-0000000000000001-01"),
        (SpanContext(TRACE_ID, 2), "00-4bf92f3577b34da6a3ce929d0e0e4736-0000000000000002-00"),
        (SpanContext(TRACE_ID, 3, 0xFF), "00-4bf92f3577b34da6a3ce929d0e0e4736-0000000000000003-01"),
    ],
)
def test_inject(sc, expected):
    carrier = {}
    HTTPTraceContextPropagator().inject(carrier, NonRecordingSpan(sc))
    assert carrier == {TRACEPARENT_HEADER: expected}


def test_inject_invalid_context_sets_nothing():
    carrier = {}
    HTTPTraceContextPropagator().inject(carrier, NonRecordingSpan(empty_span_context()))
    assert carrier == {}


def test_inject_without_current_span_sets_nothing():
    carrier = {}
    HTTPTraceContextPropagator().inject(carrier)
    assert carrier == {}


def test_inject_uses_current_span():
    carrier = {}
    with use_span(NonRecordingSpan(SAMPLED)):
        HTTPTraceContextPropagator().inject(carrier)
    assert carrier[TRACEPARENT_HEADER] == "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01"


def test_round_trip():
    propagator = HTTPTraceContextPropagator()
    carrier = {}
    propagator.inject(carrier, UNSAMPLED)
    assert propagator.extract(carrier) == UNSAMPLED


def test_get_all_keys():
    assert HTTPTraceContextPropagator().get_all_keys() == ["Traceparent"]