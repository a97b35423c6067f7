"""Binary encoding of span contexts."""

from __future__ import annotations

from teletrace.core import SpanContext, empty_span_context

_TRACE_ID_FIELD = 0
_SPAN_ID_FIELD = 1
_TRACE_FLAGS_FIELD = 2
_ENCODED_LENGTH = 29


class BinaryPropagator:
    """Serializes span contexts to and from a compact byte layout."""

    def to_bytes(self, sc: SpanContext) -> bytes:
        """Encode ``sc``; the empty context encodes to no bytes."""
        if sc == empty_span_context():
            return b""
        out = bytearray(_ENCODED_LENGTH)
        out[1] = _TRACE_ID_FIELD
        out[2:18] = (sc.trace_id & ((1 << 128) - 1)).to_bytes(16, "big")
        out[18] = _SPAN_ID_FIELD
        out[19:27] = (sc.span_id & ((1 << 64) - 1)).to_bytes(8, "big")
        out[27] = _TRACE_FLAGS_FIELD
        out[28] = sc.trace_flags & 0xFF
        return bytes(out)

    def from_bytes(self, data: bytes | None) -> SpanContext:
        """Decode a span context; anything malformed or invalid yields the empty context."""
        if not data:
            return empty_span_context()
        rest = bytes(data[1:])
        if len(rest) < 17 or rest[0] != _TRACE_ID_FIELD:
            return empty_span_context()
        trace_id = int.from_bytes(rest[1:17], "big")
        rest = rest[17:]
        span_id = 0
        trace_flags = 0
        if len(rest) >= 9 and rest[0] == _SPAN_ID_FIELD:
            span_id = int.from_bytes(rest[1:9], "big")
            rest = rest[9:]
        if len(rest) >= 2 and rest[0] == _TRACE_FLAGS_FIELD:
            trace_flags = rest[1]
        sc = SpanContext(trace_id=trace_id, span_id=span_id, trace_flags=trace_flags)
        return sc if sc.is_valid() else empty_span_context()